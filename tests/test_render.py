from graph_digitizer.app_state import AppState
from graph_digitizer.calibration import AxisRange
from graph_digitizer.render import build_overlay


def test_uncalibrated_overlay_hides_points():
    state = AppState()
    state.datasets.add_point(0, (1, 1))
    assert build_overlay(state) == []


def test_calibration_clicks_are_numbered():
    state = AppState()
    state.calibration.start(True)
    state.calibration.record_click((5, 6))
    state.calibration.record_click((7, 8))
    markers = build_overlay(state)
    assert [(m.kind, m.x, m.y, m.label) for m in markers] == [
        ("calib", 5.0, 6.0, "1"),
        ("calib", 7.0, 8.0, "2"),
    ]


def test_points_drawn_in_dataset_color(square_anchors):
    state = AppState(anchors=square_anchors, axis_range=AxisRange(0.0, 100.0, 0.0, 100.0))
    state.datasets.add_point(0, (50, 50))
    state.datasets[3].color = "#ff0000"
    state.datasets.add_point(3, (0, 100))
    state.drag_target = (3, 0)

    markers = build_overlay(state)
    kinds = [m.kind for m in markers]
    assert kinds == ["anchor"] * 4 + ["point", "point", "drag"]

    p0, p3, ring = markers[4:]
    assert (p0.x, p0.y, p0.dataset_index) == (60.0, 60.0, 0)
    assert p0.color == "#0072B2"
    assert (p3.x, p3.y, p3.color) == (10.0, 10.0, "#FF0000")
    assert (ring.x, ring.y, ring.radius) == (10.0, 10.0, 8.0)
