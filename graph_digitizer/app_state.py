from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .calibration import AxisRange, CalibrationAnchors, CalibrationSession, CoordinateTransform
from .data_model import MAX_DATASETS, DatasetStore, Selection
from .export_json import DigitizerDocument
from .image_utils import LoadedImage
from .ui_state import DisplayGeometry

log = logging.getLogger(__name__)


@dataclass
class AppState:
    datasets: DatasetStore = field(default_factory=DatasetStore)
    anchors: CalibrationAnchors = field(default_factory=CalibrationAnchors)
    axis_range: AxisRange = field(default_factory=AxisRange)
    calibration: CalibrationSession = field(default_factory=CalibrationSession)

    image: Optional[LoadedImage] = None
    geometry: DisplayGeometry = field(default_factory=DisplayGeometry)

    # point grabbed by the last primary press (kept after release for "Delete Selected")
    drag_target: Optional[Selection] = None
    dragging: bool = False

    title: str = ""
    xlabel: str = ""
    ylabel: str = ""

    @property
    def transform(self) -> CoordinateTransform:
        return CoordinateTransform(self.anchors, self.axis_range)

    def is_calibrated(self) -> bool:
        return self.anchors.is_complete()

    def to_document(self) -> DigitizerDocument:
        return DigitizerDocument(
            title=self.title,
            xlabel=self.xlabel,
            ylabel=self.ylabel,
            axis_range=AxisRange(**vars(self.axis_range)),
            datasets=list(self.datasets),
        )

    def load_document(self, doc: DigitizerDocument) -> None:
        if len(doc.datasets) > MAX_DATASETS:
            log.warning(
                "document has %d datasets; only the first %d are loaded",
                len(doc.datasets), MAX_DATASETS,
            )
        self.datasets.reset(doc.datasets)
        self.axis_range = AxisRange(**vars(doc.axis_range))
        self.title = doc.title
        self.xlabel = doc.xlabel
        self.ylabel = doc.ylabel
        self.drag_target = None
        self.dragging = False
