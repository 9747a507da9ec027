from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DisplayGeometry:
    """Placement of the image on the canvas: uniform scale plus offsets."""

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    @classmethod
    def fit(cls, img_w: int, img_h: int, canvas_w: int, canvas_h: int) -> "DisplayGeometry":
        # Letterbox the image into the canvas, centered.
        if img_w <= 0 or img_h <= 0 or canvas_w <= 0 or canvas_h <= 0:
            return cls()
        scale = min(canvas_w / img_w, canvas_h / img_h)
        return cls(
            scale=scale,
            offset_x=(canvas_w - img_w * scale) / 2.0,
            offset_y=(canvas_h - img_h * scale) / 2.0,
        )

    def to_canvas(self, ix: float, iy: float) -> Tuple[float, float]:
        return self.offset_x + ix * self.scale, self.offset_y + iy * self.scale

    def to_image(self, cx: float, cy: float) -> Tuple[float, float]:
        if self.scale == 0:
            return 0.0, 0.0
        return (cx - self.offset_x) / self.scale, (cy - self.offset_y) / self.scale
