from __future__ import annotations

import logging
import math
import re
from typing import NamedTuple, Sequence

import numpy as np

log = logging.getLogger(__name__)

_HEX6 = re.compile(r"#?([0-9a-fA-F]{6})")
_HEX3 = re.compile(r"#([0-9a-fA-F]{3})")


class RGB(NamedTuple):
    r: float
    g: float
    b: float


BLACK = RGB(0.0, 0.0, 0.0)


def hex_to_rgb(hex_str: str) -> RGB:
    """
    Decode '#RRGGBB' / 'RRGGBB' / '#RGB' into channels in [0, 1].

    Anything else decodes to black. The 3-digit form needs the leading '#'
    so bare words like 'bad' or 'fed' are not taken as colors.
    """
    s = (hex_str or "").strip()
    m = _HEX6.fullmatch(s)
    if m:
        h = m.group(1)
    else:
        m = _HEX3.fullmatch(s)
        if not m:
            log.debug("unparsable color %r, using black", hex_str)
            return BLACK
        h = "".join(c * 2 for c in m.group(1))
    return RGB(
        int(h[0:2], 16) / 255.0,
        int(h[2:4], 16) / 255.0,
        int(h[4:6], 16) / 255.0,
    )


def rgb_to_hex(rgb: Sequence[float]) -> str:
    def chan(v: float) -> int:
        return max(0, min(255, int(round(float(v) * 255.0))))

    return "#{:02X}{:02X}{:02X}".format(chan(rgb[0]), chan(rgb[1]), chan(rgb[2]))


def color_distance(a: Sequence[float], b: Sequence[float]) -> float:
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return math.sqrt(dr * dr + dg * dg + db * db)


def color_distance_array(pixels: np.ndarray, target: Sequence[float]) -> np.ndarray:
    """
    Euclidean distance of every pixel in an (..., 3) float array to target.

    Samples that cannot be read (NaN / inf channels) come back as +inf.
    """
    if pixels.shape[-1] != 3:
        raise ValueError("pixels must have 3 channels in the last axis")
    t = np.asarray(target, dtype=np.float64)
    diff = pixels.astype(np.float64, copy=False) - t
    d = np.sqrt(np.sum(diff * diff, axis=-1))
    return np.where(np.isfinite(d), d, np.inf)
