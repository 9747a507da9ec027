from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .app_state import AppState
from .colors import rgb_to_hex

ANCHOR_RADIUS = 5.0
CALIB_RADIUS = 6.0
POINT_RADIUS = 5.0
DRAG_RING_RADIUS = 8.0


@dataclass(frozen=True)
class Marker:
    # kind: anchor | calib | point | drag
    kind: str
    x: float
    y: float
    radius: float
    color: str
    label: Optional[str] = None
    dataset_index: Optional[int] = None


def build_overlay(state: AppState) -> List[Marker]:
    """Markers to draw over the image, in paint order, in canvas pixels."""
    markers: List[Marker] = []

    for p in state.anchors.as_tuple():
        if p is not None:
            markers.append(Marker("anchor", p[0], p[1], ANCHOR_RADIUS, "#000000"))

    if state.calibration.active:
        for i, (cx, cy) in enumerate(state.calibration.clicks, start=1):
            markers.append(Marker("calib", cx, cy, CALIB_RADIUS, "#000000", label=str(i)))

    transform = state.transform
    if not transform.is_calibrated():
        # without anchors every point would collapse onto (0, 0)
        return markers

    for di, ds in enumerate(state.datasets):
        color = rgb_to_hex(ds.color_rgb)
        for pi, (x, y) in enumerate(ds.points):
            cx, cy = transform.data_to_pixel(x, y)
            markers.append(Marker("point", cx, cy, POINT_RADIUS, color, dataset_index=di))
            if state.drag_target == (di, pi):
                markers.append(Marker("drag", cx, cy, DRAG_RING_RADIUS, "#000000", dataset_index=di))
    return markers
