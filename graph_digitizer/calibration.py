from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .errors import CalibrationNotActive, NoImageLoaded

log = logging.getLogger(__name__)

Pixel = Tuple[float, float]

# Order in which the four calibration clicks are assigned.
ANCHOR_ORDER = ("px_xmin", "px_xmax", "px_ymin", "px_ymax")
ANCHOR_PROMPTS = ("X-left", "X-right", "Y-bottom", "Y-top")


class AxisScale(str, Enum):
    LINEAR = "linear"
    LOG10 = "log10"


@dataclass
class AxisRange:
    x_min: float = 0.0
    x_max: float = 1.0
    y_min: float = 0.0
    y_max: float = 1.0
    x_log: bool = False
    y_log: bool = False

    @property
    def x_scale(self) -> AxisScale:
        return AxisScale.LOG10 if self.x_log else AxisScale.LINEAR

    @property
    def y_scale(self) -> AxisScale:
        return AxisScale.LOG10 if self.y_log else AxisScale.LINEAR


@dataclass(frozen=True)
class CalibrationAnchors:
    px_xmin: Optional[Pixel] = None
    px_xmax: Optional[Pixel] = None
    px_ymin: Optional[Pixel] = None
    px_ymax: Optional[Pixel] = None

    def is_complete(self) -> bool:
        return None not in (self.px_xmin, self.px_xmax, self.px_ymin, self.px_ymax)

    def as_tuple(self) -> Tuple[Optional[Pixel], ...]:
        return (self.px_xmin, self.px_xmax, self.px_ymin, self.px_ymax)

    @classmethod
    def from_clicks(cls, clicks: List[Pixel]) -> "CalibrationAnchors":
        if len(clicks) != 4:
            raise ValueError(f"need exactly 4 clicks, got {len(clicks)}")
        a, b, c, d = (
            (float(p[0]), float(p[1])) for p in clicks
        )
        return cls(px_xmin=a, px_xmax=b, px_ymin=c, px_ymax=d)


@dataclass
class AxisCalibration:
    # pixel anchors
    p0: float
    p1: float
    # value anchors
    v0: float
    v1: float
    scale: AxisScale = AxisScale.LINEAR

    def is_valid(self) -> bool:
        if self.p0 == self.p1 or self.v0 == self.v1:
            return False
        if self.scale == AxisScale.LOG10:
            return self.v0 > 0 and self.v1 > 0
        return True

    def _log_bounds(self) -> Optional[Tuple[float, float]]:
        if self.v0 <= 0 or self.v1 <= 0:
            return None
        return math.log10(self.v0), math.log10(self.v1)

    def value_to_px(self, v: float) -> float:
        if self.scale == AxisScale.LOG10:
            bounds = self._log_bounds()
            if v <= 0 or bounds is None or bounds[0] == bounds[1]:
                log.debug("log axis outside its domain (v=%r, range=%r..%r)", v, self.v0, self.v1)
                t = 0.0
            else:
                lv0, lv1 = bounds
                t = (math.log10(v) - lv0) / (lv1 - lv0)
        else:
            span = self.v1 - self.v0
            t = 0.0 if span == 0 else (v - self.v0) / span
        return self.p0 + t * (self.p1 - self.p0)

    def px_to_value(self, p: float) -> float:
        denom = self.p1 - self.p0
        t = 0.0 if denom == 0 else (p - self.p0) / denom
        if self.scale == AxisScale.LOG10:
            bounds = self._log_bounds()
            if bounds is None:
                log.debug("log axis with non-positive range %r..%r", self.v0, self.v1)
                return float(self.v0)
            lv0, lv1 = bounds
            try:
                return 10 ** (lv0 + t * (lv1 - lv0))
            except OverflowError:
                return math.inf
        return self.v0 + t * (self.v1 - self.v0)


@dataclass(frozen=True)
class CoordinateTransform:
    """Pixel <-> data mapping for one set of anchors and axis bounds."""

    anchors: CalibrationAnchors
    axis_range: AxisRange

    def is_calibrated(self) -> bool:
        return self.anchors.is_complete()

    def x_axis(self) -> AxisCalibration:
        a = self.anchors
        r = self.axis_range
        return AxisCalibration(a.px_xmin[0], a.px_xmax[0], r.x_min, r.x_max, r.x_scale)

    def y_axis(self) -> AxisCalibration:
        a = self.anchors
        r = self.axis_range
        return AxisCalibration(a.px_ymin[1], a.px_ymax[1], r.y_min, r.y_max, r.y_scale)

    def data_to_pixel(self, x: float, y: float) -> Tuple[float, float]:
        if not self.is_calibrated():
            return (0.0, 0.0)
        return self.x_axis().value_to_px(x), self.y_axis().value_to_px(y)

    def pixel_to_data(self, px: float, py: float) -> Tuple[float, float]:
        if not self.is_calibrated():
            return (0.0, 0.0)
        return self.x_axis().px_to_value(px), self.y_axis().px_to_value(py)


class CalibrationPhase(str, Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    COMPLETE = "complete"


@dataclass
class CalibrationSession:
    """
    Collects the four calibration clicks.

    The anchors are only handed out once all four clicks are in, in the
    order X-left, X-right, Y-bottom, Y-top. Axis bounds are not touched here.
    """

    phase: CalibrationPhase = CalibrationPhase.IDLE
    _clicks: List[Pixel] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return self.phase == CalibrationPhase.COLLECTING

    @property
    def clicks(self) -> Tuple[Pixel, ...]:
        return tuple(self._clicks)

    @property
    def remaining(self) -> int:
        return 4 - len(self._clicks) if self.active else 0

    def next_prompt(self) -> Optional[str]:
        if not self.active:
            return None
        return ANCHOR_PROMPTS[len(self._clicks)]

    def start(self, image_loaded: bool) -> None:
        if not image_loaded:
            raise NoImageLoaded("Load image first")
        self._clicks.clear()
        self.phase = CalibrationPhase.COLLECTING

    def cancel(self) -> None:
        if not self.active:
            return
        self._clicks.clear()
        self.phase = CalibrationPhase.IDLE

    def record_click(self, pos: Pixel) -> Optional[CalibrationAnchors]:
        if not self.active:
            raise CalibrationNotActive("Calibration is not in progress")
        self._clicks.append((float(pos[0]), float(pos[1])))
        if len(self._clicks) < 4:
            return None
        anchors = CalibrationAnchors.from_clicks(self._clicks)
        self._clicks.clear()
        self.phase = CalibrationPhase.COMPLETE
        return anchors
