from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import ImageLoadError

IMAGE_PATTERNS = ("*.png", "*.jpg", "*.jpeg", "*.bmp", "*.gif", "*.tif", "*.tiff")


@dataclass
class LoadedImage:
    pil: Image.Image
    pixels: np.ndarray  # H x W x 3 float64 in [0, 1]
    path: str = ""

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


def pil_to_rgb01(pil_img: Image.Image) -> np.ndarray:
    """
    Convert a PIL image to an RGB float array (H, W, 3) scaled to [0, 1].
    Alpha is dropped; palette and greyscale images are expanded to RGB.
    """
    arr = np.asarray(pil_img.convert("RGB"), dtype=np.uint8)
    return arr.astype(np.float64) / 255.0


def load_image(path: Union[str, Path]) -> LoadedImage:
    try:
        with Image.open(path) as im:
            im.load()
            pil = im.convert("RGB")
        pixels = pil_to_rgb01(pil)
    except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"{Path(path).name}: {e}") from e
    except MemoryError as e:
        raise ImageLoadError(f"{Path(path).name}: image too large to load") from e
    return LoadedImage(pil=pil, pixels=pixels, path=str(path))
