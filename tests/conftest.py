import numpy as np
import pytest
from PIL import Image

from graph_digitizer.calibration import AxisRange, CalibrationAnchors, CoordinateTransform
from graph_digitizer.image_utils import LoadedImage, pil_to_rgb01


@pytest.fixture
def square_anchors():
    # 100x100 px plot area, y axis pointing up: bottom at y=110, top at y=10
    return CalibrationAnchors(
        px_xmin=(10.0, 110.0),
        px_xmax=(110.0, 110.0),
        px_ymin=(10.0, 110.0),
        px_ymax=(10.0, 10.0),
    )


@pytest.fixture
def identity_transform():
    # data (x, y) lands on canvas pixel (x, y)
    anchors = CalibrationAnchors(
        px_xmin=(0.0, 0.0), px_xmax=(100.0, 0.0), px_ymin=(0.0, 0.0), px_ymax=(0.0, 100.0)
    )
    return CoordinateTransform(anchors, AxisRange(0.0, 100.0, 0.0, 100.0))


def make_image(width=120, height=120, color="white") -> LoadedImage:
    pil = Image.new("RGB", (width, height), color)
    return LoadedImage(pil=pil, pixels=pil_to_rgb01(pil), path="<memory>")


def image_from_pixels(pixels: np.ndarray) -> LoadedImage:
    arr = (np.clip(np.nan_to_num(pixels), 0, 1) * 255).astype(np.uint8)
    return LoadedImage(pil=Image.fromarray(arr, "RGB"), pixels=pixels, path="<memory>")
