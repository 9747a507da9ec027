from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

from .calibration import CoordinateTransform
from .data_model import Dataset, Selection


def find_nearest(
    datasets: Iterable[Dataset],
    transform: CoordinateTransform,
    position: Tuple[float, float],
    max_distance: float,
) -> Optional[Selection]:
    """
    Closest point to `position` (canvas pixels) across all datasets.

    Points are visited dataset by dataset, in point order. A point at exactly
    max_distance still counts; on equal distances the first visited wins.
    """
    x, y = float(position[0]), float(position[1])
    best: Optional[Selection] = None
    best_d = float(max_distance)
    for di, ds in enumerate(datasets):
        for pi, (dx, dy) in enumerate(ds.points):
            cx, cy = transform.data_to_pixel(dx, dy)
            d = math.hypot(cx - x, cy - y)
            if not d <= best_d:
                continue
            if best is not None and d == best_d:
                continue
            best_d = d
            best = (di, pi)
    return best
