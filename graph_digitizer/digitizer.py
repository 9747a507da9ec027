from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from .app_state import AppState
from .calibration import ANCHOR_PROMPTS, AxisRange
from .errors import CalibrationNotActive, DigitizerError, NoImageLoaded
from .export_csv import write_csv
from .export_json import read_json, write_json
from .extract import auto_trace
from .image_utils import LoadedImage, load_image
from .spatial import find_nearest
from .text_utils import default_filename, safe_parse_float
from .ui_state import DisplayGeometry

log = logging.getLogger(__name__)

PICK_RADIUS_PX = 8.0
BUTTON_PRIMARY = 1
BUTTON_SECONDARY = 3


class Digitizer:
    """
    Operations the front end drives, applied to one AppState.

    Every outcome is reported as a one-line status through `on_status`
    (and the module logger). Preconditions that are not met turn into a
    status line and a False/None return, never an exception.
    """

    def __init__(self, state: Optional[AppState] = None, on_status: Optional[Callable[[str], None]] = None) -> None:
        self.state = state if state is not None else AppState()
        self.on_status = on_status
        self.last_status = ""

    def _status(self, msg: str, level: int = logging.INFO) -> None:
        self.last_status = msg
        log.log(level, msg)
        if self.on_status is not None:
            self.on_status(msg)

    # ---------- image ----------
    def load_image(self, path: str) -> bool:
        try:
            loaded = load_image(path)
        except DigitizerError as e:
            self._status(f"Failed to load image: {e}", logging.ERROR)
            return False
        self.set_image(loaded)
        self._status(f"Loaded: {path}")
        return True

    def set_image(self, loaded: LoadedImage) -> None:
        self.state.image = loaded
        self.state.geometry = DisplayGeometry()

    def update_geometry(self, canvas_w: int, canvas_h: int) -> DisplayGeometry:
        img = self.state.image
        if img is None:
            self.state.geometry = DisplayGeometry()
        else:
            self.state.geometry = DisplayGeometry.fit(img.width, img.height, canvas_w, canvas_h)
        return self.state.geometry

    # ---------- calibration ----------
    def is_calibrated(self) -> bool:
        return self.state.is_calibrated()

    def begin_calibration(self) -> bool:
        try:
            self.state.calibration.start(self.state.image is not None)
        except NoImageLoaded as e:
            self._status(str(e), logging.WARNING)
            return False
        self._status("Calibration mode: click " + ", ".join(ANCHOR_PROMPTS) + " (4 clicks).")
        return True

    def cancel_calibration(self) -> None:
        if self.state.calibration.active:
            self.state.calibration.cancel()
            self._status("Calibration cancelled.")

    def _record_calibration_click(self, x: float, y: float) -> None:
        session = self.state.calibration
        try:
            anchors = session.record_click((x, y))
        except CalibrationNotActive as e:
            self._status(str(e), logging.WARNING)
            return
        if anchors is None:
            n = len(session.clicks)
            self._status(
                f"Calibration: recorded click {n}. {session.remaining} more ({session.next_prompt()})."
            )
            return
        self.state.anchors = anchors
        self._status("Calibration clicks recorded - enter numeric ranges and Apply Calibration")

    def apply_calibration(
        self,
        x_min: str,
        x_max: str,
        y_min: str,
        y_max: str,
        x_log: bool = False,
        y_log: bool = False,
    ) -> bool:
        if not self.state.anchors.is_complete():
            self._status("Calibration not recorded", logging.WARNING)
            return False
        vals = [safe_parse_float(v) for v in (x_min, x_max, y_min, y_max)]
        if any(v is None for v in vals):
            self._status("Please enter valid numeric X/Y min/max", logging.WARNING)
            return False
        xm, xM, ym, yM = vals
        self.state.axis_range = AxisRange(xm, xM, ym, yM, bool(x_log), bool(y_log))

        problems = []
        for name, cal in (("X", self.state.transform.x_axis()), ("Y", self.state.transform.y_axis())):
            if not cal.is_valid():
                problems.append(name)
        if problems:
            self._status(
                "Calibration applied, but the " + "/".join(problems) + " axis is degenerate "
                "(equal bounds or anchors, or a log axis with bounds <= 0).",
                logging.WARNING,
            )
        else:
            self._status("Calibration applied.")
        return True

    # ---------- pointer ----------
    def press(self, x: float, y: float, button: int = BUTTON_PRIMARY) -> bool:
        st = self.state
        if st.calibration.active:
            self._record_calibration_click(x, y)
            return True
        if st.image is None:
            return False

        found = find_nearest(st.datasets, st.transform, (x, y), PICK_RADIUS_PX)
        if button == BUTTON_PRIMARY:
            if found is not None:
                st.dragging = True
                st.drag_target = found
                self._status(f"Selected point for dragging (dataset {found[0] + 1}, point {found[1] + 1})")
            else:
                dx, dy = st.transform.pixel_to_data(x, y)
                st.datasets.add_point(st.datasets.active_index, (dx, dy))
                self._status(f"Added point: ({dx:g}, {dy:g})")
            return True
        if button == BUTTON_SECONDARY:
            if found is not None and st.datasets.delete_by_selection(found):
                if st.drag_target == found:
                    st.drag_target = None
                elif st.drag_target is not None and st.drag_target[0] == found[0] and st.drag_target[1] > found[1]:
                    st.drag_target = (found[0], st.drag_target[1] - 1)
                self._status(f"Deleted point from dataset {found[0] + 1}")
            return True
        return False

    def drag(self, x: float, y: float) -> bool:
        st = self.state
        if not st.dragging or st.drag_target is None:
            return False
        di, pi = st.drag_target
        return st.datasets.move_point(di, pi, st.transform.pixel_to_data(x, y))

    def release(self) -> bool:
        if not self.state.dragging:
            return False
        self.state.dragging = False
        self._status("Drag finished")
        return True

    def delete_selected(self) -> bool:
        st = self.state
        if st.drag_target is None:
            self._status("No selected point to delete - click near a point to select", logging.WARNING)
            return False
        st.datasets.delete_by_selection(st.drag_target)
        st.drag_target = None
        st.dragging = False
        self._status("Deleted selected point")
        return True

    # ---------- datasets ----------
    def select_dataset(self, index: int) -> bool:
        try:
            self.state.datasets.select_active(index)
        except IndexError as e:
            self._status(str(e), logging.WARNING)
            return False
        return True

    def rename_active(self, name: str) -> None:
        self.state.datasets.rename_active(name)
        self._status("Dataset name updated")

    def recolor_active(self, hex_color: str) -> None:
        self.state.datasets.recolor_active(hex_color)
        self._status("Dataset color updated")

    def set_labels(self, title: str, xlabel: str, ylabel: str) -> None:
        self.state.title = title
        self.state.xlabel = xlabel
        self.state.ylabel = ylabel

    def has_data(self) -> bool:
        return self.state.datasets.total_points() > 0

    # ---------- auto trace ----------
    def auto_trace(self) -> Optional[int]:
        st = self.state
        if st.image is None:
            self._status("Load an image first", logging.WARNING)
            return None
        if not st.is_calibrated():
            self._status("Please perform calibration before auto-trace", logging.WARNING)
            return None
        ds = st.datasets.active
        sampled = auto_trace(st.image.pixels, st.anchors, st.axis_range, ds.color_rgb, st.geometry)
        st.datasets.replace_points(st.datasets.active_index, sampled)
        if st.drag_target is not None and st.drag_target[0] == st.datasets.active_index:
            st.drag_target = None
            st.dragging = False
        self._status(f"Auto-trace completed - {len(sampled)} points")
        return len(sampled)

    # ---------- files ----------
    def default_save_path(self, ext: str) -> Path:
        return default_filename(self.state.title, ext)

    def save_json(self, path: str) -> bool:
        try:
            write_json(path, self.state.to_document())
        except DigitizerError as e:
            self._status(f"Failed to save JSON: {e}", logging.ERROR)
            return False
        self._status(f"Saved JSON to: {path}")
        return True

    def save_csv(self, path: str) -> bool:
        try:
            write_csv(path, self.state.datasets)
        except DigitizerError as e:
            self._status(f"Failed to save CSV: {e}", logging.ERROR)
            return False
        self._status(f"Saved CSV to: {path}")
        return True

    def load_json(self, path: str) -> bool:
        try:
            doc = read_json(path)
        except DigitizerError as e:
            self._status(f"Failed to load JSON: {e}", logging.ERROR)
            return False
        self.state.load_document(doc)
        self._status(f"Loaded JSON: {path}")
        return True
