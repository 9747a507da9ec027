import json

import numpy as np
import pytest
from PIL import Image

from conftest import image_from_pixels, make_image
from graph_digitizer.calibration import CalibrationPhase
from graph_digitizer.digitizer import BUTTON_PRIMARY, BUTTON_SECONDARY, Digitizer

CLICKS = [(10, 110), (110, 110), (10, 110), (10, 10)]


def calibrated(image=None):
    messages = []
    dz = Digitizer(on_status=messages.append)
    dz.set_image(image or make_image())
    assert dz.begin_calibration()
    for x, y in CLICKS:
        assert dz.press(x, y)
    assert dz.apply_calibration("0", "100", "0", "100")
    messages.clear()
    return dz, messages


def test_calibration_needs_image():
    messages = []
    dz = Digitizer(on_status=messages.append)
    assert not dz.begin_calibration()
    assert messages == ["Load image first"]
    assert dz.state.calibration.phase is CalibrationPhase.IDLE
    assert not dz.press(10, 10)


def test_calibration_flow_reports_progress():
    messages = []
    dz = Digitizer(on_status=messages.append)
    dz.set_image(make_image())
    dz.begin_calibration()
    assert "X-left, X-right, Y-bottom, Y-top" in messages[-1]
    for x, y in CLICKS[:3]:
        dz.press(x, y)
    assert not dz.is_calibrated()
    # clicks during calibration never become data points
    assert dz.state.datasets.total_points() == 0
    dz.press(*CLICKS[3])
    assert dz.is_calibrated()
    assert dz.state.calibration.phase is CalibrationPhase.COMPLETE
    assert dz.last_status == "Calibration clicks recorded - enter numeric ranges and Apply Calibration"
    assert dz.state.anchors.px_ymax == (10.0, 10.0)


def test_cancel_calibration_keeps_old_anchors():
    dz, _ = calibrated()
    before = dz.state.anchors
    dz.begin_calibration()
    dz.press(1, 1)
    dz.cancel_calibration()
    assert dz.state.anchors == before
    assert not dz.state.calibration.active
    assert dz.last_status == "Calibration cancelled."


def test_apply_calibration_validation():
    dz = Digitizer()
    dz.set_image(make_image())
    assert not dz.apply_calibration("0", "1", "0", "1")
    assert dz.last_status == "Calibration not recorded"

    dz, _ = calibrated()
    assert not dz.apply_calibration("0", "abc", "0", "100")
    assert dz.last_status == "Please enter valid numeric X/Y min/max"
    assert dz.state.axis_range.x_max == 100.0

    assert dz.apply_calibration("0", "100", "0", "100", x_log=True)
    assert "degenerate" in dz.last_status
    assert dz.state.axis_range.x_log


def test_add_drag_release_delete():
    dz, messages = calibrated()
    assert dz.press(60, 60, BUTTON_PRIMARY)
    assert dz.state.datasets[0].points == [(50.0, 50.0)]
    assert messages[-1] == "Added point: (50, 50)"

    # pressing near the point grabs it instead of adding another
    dz.press(62, 61)
    assert dz.state.dragging
    assert dz.state.drag_target == (0, 0)
    assert dz.drag(70, 40)
    assert dz.state.datasets[0].points == [(60.0, 70.0)]
    assert dz.release()
    assert not dz.state.dragging
    assert not dz.drag(0, 0)
    assert messages[-1] == "Drag finished"

    # the last grabbed point stays selected for deletion
    assert dz.delete_selected()
    assert dz.state.datasets[0].points == []
    assert dz.state.drag_target is None
    assert not dz.delete_selected()


def test_secondary_click_deletes_nearest_any_dataset():
    dz, _ = calibrated()
    dz.press(30, 30)
    dz.select_dataset(2)
    dz.press(80, 80)
    dz.press(31, 29, BUTTON_SECONDARY)
    assert dz.state.datasets[0].points == []
    assert dz.state.datasets[2].points == [(70.0, 30.0)]
    # nothing near: no change
    dz.press(10, 100, BUTTON_SECONDARY)
    assert dz.state.datasets.total_points() == 1


def test_secondary_delete_shifts_selection():
    dz, _ = calibrated()
    dz.press(20, 20)
    dz.press(40, 40)
    dz.press(41, 41)
    dz.release()
    assert dz.state.drag_target == (0, 1)
    dz.press(20, 20, BUTTON_SECONDARY)
    assert dz.state.drag_target == (0, 0)
    assert dz.state.datasets[0].points == [(30.0, 70.0)]


def test_select_dataset_out_of_range():
    dz = Digitizer()
    assert dz.select_dataset(5)
    assert not dz.select_dataset(6)
    assert dz.state.datasets.active_index == 5


def test_auto_trace_replaces_active_points():
    px = np.ones((120, 120, 3))
    px[60, :] = (1.0, 0.0, 0.0)
    dz, _ = calibrated(image_from_pixels(px))
    dz.recolor_active("#FF0000")
    dz.press(30, 30)
    n = dz.auto_trace()
    assert n == 100
    pts = dz.state.datasets[0].points
    assert len(pts) == 100
    assert all(y == pytest.approx(50.0) for _, y in pts)
    assert pts[0][0] == pytest.approx(0.0)
    assert pts[-1][0] == pytest.approx(100.0)
    assert dz.last_status == "Auto-trace completed - 100 points"


def test_auto_trace_preconditions():
    dz = Digitizer()
    assert dz.auto_trace() is None
    assert dz.last_status == "Load an image first"
    dz.set_image(make_image())
    assert dz.auto_trace() is None
    assert dz.last_status == "Please perform calibration before auto-trace"


def test_save_and_load_json(tmp_path):
    dz, _ = calibrated()
    dz.set_labels("Fig 2", "t", "v")
    dz.rename_active("control")
    dz.press(60, 60)
    path = tmp_path / "fig.json"
    assert dz.save_json(str(path))
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["title"] == "Fig 2"
    assert saved["datasets"][0]["points"] == [[50.0, 50.0]]

    other = Digitizer()
    assert other.load_json(str(path))
    assert other.state.title == "Fig 2"
    assert other.state.datasets[0].name == "control"
    assert other.state.datasets[0].points == [(50.0, 50.0)]
    assert other.state.axis_range.x_max == 100.0
    assert other.has_data()


def test_load_json_caps_dataset_count(tmp_path, caplog):
    payload = {"datasets": [{"name": f"d{i}", "color": "#000000", "points": []} for i in range(8)]}
    path = tmp_path / "many.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    dz = Digitizer()
    assert dz.load_json(str(path))
    assert [d.name for d in dz.state.datasets] == [f"d{i}" for i in range(6)]
    assert "only the first 6" in caplog.text


def test_file_failures_leave_state_alone(tmp_path):
    dz, messages = calibrated()
    dz.press(60, 60)
    bad = tmp_path / "broken.json"
    bad.write_text("{", encoding="utf-8")
    assert not dz.load_json(str(bad))
    assert messages[-1].startswith("Failed to load JSON:")
    assert dz.state.datasets[0].points == [(50.0, 50.0)]

    assert not dz.save_csv(str(tmp_path))
    assert messages[-1].startswith("Failed to save CSV:")

    image = dz.state.image
    assert not dz.load_image(str(tmp_path / "nope.png"))
    assert messages[-1].startswith("Failed to load image:")
    assert dz.state.image is image


def test_save_csv(tmp_path):
    dz, _ = calibrated()
    dz.press(60, 60)
    path = tmp_path / "pts.csv"
    assert dz.save_csv(str(path))
    assert path.read_text(encoding="utf-8") == "dataset,x,y\nDataset 1,50.0,50.0\n"


def test_default_save_path_uses_title():
    dz = Digitizer()
    dz.set_labels("My plot", "", "")
    assert dz.default_save_path("csv").name == "My_plot.csv"


def test_oversized_image_reports_status(tmp_path, monkeypatch):
    path = tmp_path / "huge.png"
    Image.new("RGB", (300, 300), "white").save(path)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    dz = Digitizer()
    assert not dz.load_image(str(path))
    assert dz.last_status.startswith("Failed to load image:")
    assert dz.state.image is None


def test_save_json_refuses_non_finite_points(tmp_path):
    dz, messages = calibrated()
    dz.state.datasets.add_point(0, (float("inf"), 1.0))
    path = tmp_path / "inf.json"
    assert not dz.save_json(str(path))
    assert messages[-1].startswith("Failed to save JSON:")
    assert not path.exists()
