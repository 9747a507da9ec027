from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .calibration import AxisRange, CalibrationAnchors, CoordinateTransform
from .colors import color_distance_array
from .ui_state import DisplayGeometry


def sample_columns(x1: float, x2: float) -> List[float]:
    """
    Canvas x positions sampled between the two X anchors (inclusive).

    One column per canvas pixel of anchor span; a span under 2 px yields the
    single column at x1.
    """
    ncols = int(round(abs(x2 - x1)))
    last = max(0, ncols - 1)
    denom = max(1, ncols - 1)
    return [x1 + (i / denom) * (x2 - x1) for i in range(last + 1)]


def best_rows(
    pixels: np.ndarray,
    image_cols: Sequence[int],
    target_rgb: Sequence[float],
) -> List[Optional[int]]:
    """
    For each image column, the row whose color is nearest target_rgb.

    Exact ties go to the topmost row. A column with no readable pixel
    (every distance infinite) gives None.
    """
    if not image_cols:
        return []
    cols = pixels[:, list(image_cols), :]              # H x N x 3
    dists = color_distance_array(cols, target_rgb)     # H x N
    rows = np.argmin(dists, axis=0)                    # first minimum per column
    readable = np.isfinite(dists).any(axis=0)
    return [int(r) if ok else None for r, ok in zip(rows, readable)]


def auto_trace(
    pixels: Optional[np.ndarray],
    anchors: CalibrationAnchors,
    axis_range: AxisRange,
    target_rgb: Sequence[float],
    geometry: DisplayGeometry,
) -> List[Tuple[float, float]]:
    """
    Trace one data point per sampled column by color matching.

    `pixels` is the image as an H x W x 3 float array in [0, 1]. Columns are
    sampled in canvas space between the X anchors, mapped back into the image
    through `geometry`, and the best matching row is converted to data
    coordinates. Output is in increasing column order; columns outside the
    image or without a readable pixel produce nothing.
    """
    if pixels is None or not anchors.is_complete():
        return []
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError("pixels must be HxWx3")
    h, w = pixels.shape[:2]
    if h == 0 or w == 0 or geometry.scale == 0:
        return []

    transform = CoordinateTransform(anchors, axis_range)

    kept: List[Tuple[float, int]] = []  # (canvas x, image column)
    for cx in sample_columns(anchors.px_xmin[0], anchors.px_xmax[0]):
        ix = int(round((cx - geometry.offset_x) / geometry.scale))
        if ix < 0 or ix >= w:
            continue
        kept.append((cx, ix))

    rows = best_rows(pixels, [ix for _cx, ix in kept], target_rgb)

    sampled: List[Tuple[float, float]] = []
    for (cx, _ix), row in zip(kept, rows):
        if row is None:
            continue
        cy = geometry.offset_y + geometry.scale * row
        sampled.append(transform.pixel_to_data(cx, cy))
    return sampled
