import pytest

from graph_digitizer.colors import hex_to_rgb
from graph_digitizer.data_model import DEFAULT_COLORS, MAX_DATASETS, Dataset, DatasetStore


def test_store_starts_with_default_palette():
    store = DatasetStore()
    assert len(store) == MAX_DATASETS == 6
    assert [d.name for d in store] == [f"Dataset {i}" for i in range(1, 7)]
    assert [d.color for d in store] == list(DEFAULT_COLORS)
    assert all(d.color_rgb == hex_to_rgb(d.color) for d in store)
    assert all(d.points == [] for d in store)
    assert store.active_index == 0


def test_color_rgb_follows_color():
    ds = Dataset(name="a", color="#FF0000")
    assert ds.color_rgb == (1.0, 0.0, 0.0)
    ds.color = "#00ff00"
    assert ds.color_rgb == (0.0, 1.0, 0.0)
    ds.color = "nonsense"
    assert ds.color_rgb == (0.0, 0.0, 0.0)
    with pytest.raises(AttributeError):
        ds.color_rgb = (1.0, 1.0, 1.0)


def test_select_rename_recolor_active():
    store = DatasetStore()
    store.select_active(3)
    store.rename_active("Control")
    rgb = store.recolor_active("#000080")
    assert store[3].name == "Control"
    assert store[3].color == "#000080"
    assert rgb == store[3].color_rgb == hex_to_rgb("#000080")
    assert store[0].name == "Dataset 1"


@pytest.mark.parametrize("index", [-1, 6, 100])
def test_select_active_out_of_range(index):
    store = DatasetStore()
    store.select_active(2)
    with pytest.raises(IndexError):
        store.select_active(index)
    assert store.active_index == 2


def test_point_edits():
    store = DatasetStore()
    assert store.add_point(1, (1, 2))
    assert store.add_point(1, (1, 2))
    assert store.add_point(1, (0, 5))
    # appended as given, no sorting or de-duplication
    assert store[1].points == [(1.0, 2.0), (1.0, 2.0), (0.0, 5.0)]

    assert store.move_point(1, 0, (9, 9))
    assert store[1].points[0] == (9.0, 9.0)

    assert store.delete_point(1, 1)
    assert store[1].points == [(9.0, 9.0), (0.0, 5.0)]
    assert store.delete_by_selection((1, 0))
    assert store[1].points == [(0.0, 5.0)]
    assert store.total_points() == 1


def test_stale_indices_are_ignored():
    store = DatasetStore()
    store.add_point(0, (1, 1))
    assert not store.move_point(0, 1, (2, 2))
    assert not store.delete_point(0, -1)
    assert not store.delete_point(7, 0)
    assert not store.delete_by_selection(None)
    assert not store.delete_by_selection((0, 5))
    assert not store.add_point(6, (0, 0))
    assert store[0].points == [(1.0, 1.0)]


def test_replace_and_clear():
    store = DatasetStore()
    store.add_point(2, (1, 1))
    store.replace_points(2, [(3, 4), (5, 6)])
    assert store[2].points == [(3.0, 4.0), (5.0, 6.0)]
    store.clear_points()
    assert store.total_points() == 0


def test_reset_keeps_six_slots():
    extra = [Dataset(name=f"d{i}", color="#123456", points=[(i, i)]) for i in range(8)]
    store = DatasetStore()
    store.select_active(4)
    store.reset(extra)
    assert len(store) == MAX_DATASETS
    assert [d.name for d in store] == [f"d{i}" for i in range(6)]
    assert store.active_index == 0

    store.reset(extra[:2])
    assert store[1].name == "d1"
    assert store[2].name == "Dataset 3"
    assert store[2].color == DEFAULT_COLORS[2]
