from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from .colors import RGB, hex_to_rgb

MAX_DATASETS = 6
# Okabe-Ito palette, readable for most forms of color blindness.
DEFAULT_COLORS = ("#0072B2", "#E69F00", "#009E73", "#CC79A7", "#F0E442", "#56B4E9")

Point = Tuple[float, float]
# (dataset_index, point_index), both 0-based
Selection = Tuple[int, int]


@dataclass
class Dataset:
    name: str
    color: str
    points: List[Point] = field(default_factory=list)
    # derived from color on every assignment of color
    color_rgb: RGB = field(init=False, repr=False, compare=False)

    def __setattr__(self, key, value) -> None:
        if key == "color_rgb":
            raise AttributeError("color_rgb is derived from color; assign color instead")
        if key == "color":
            value = str(value)
            object.__setattr__(self, "color", value)
            object.__setattr__(self, "color_rgb", hex_to_rgb(value))
            return
        object.__setattr__(self, key, value)

    @classmethod
    def default(cls, index: int) -> "Dataset":
        return cls(name=f"Dataset {index + 1}", color=DEFAULT_COLORS[index % len(DEFAULT_COLORS)])


class DatasetStore:
    """
    Fixed set of MAX_DATASETS dataset slots plus the active slot index.

    Point edits take explicit (dataset, point) indices; indices that no
    longer exist are ignored and reported back as False.
    """

    def __init__(self, datasets: Optional[Sequence[Dataset]] = None) -> None:
        self._datasets: Tuple[Dataset, ...] = ()
        self._active = 0
        self.reset(datasets or ())

    def __len__(self) -> int:
        return len(self._datasets)

    def __iter__(self) -> Iterator[Dataset]:
        return iter(self._datasets)

    def __getitem__(self, index: int) -> Dataset:
        return self._datasets[index]

    @property
    def datasets(self) -> Tuple[Dataset, ...]:
        return self._datasets

    @property
    def active_index(self) -> int:
        return self._active

    @property
    def active(self) -> Dataset:
        return self._datasets[self._active]

    def _valid(self, dataset_index: int, point_index: Optional[int] = None) -> bool:
        if not (0 <= dataset_index < len(self._datasets)):
            return False
        if point_index is None:
            return True
        return 0 <= point_index < len(self._datasets[dataset_index].points)

    def select_active(self, index: int) -> Dataset:
        if not self._valid(index):
            raise IndexError(f"dataset index {index} out of range 0..{len(self._datasets) - 1}")
        self._active = index
        return self.active

    def rename_active(self, name: str) -> None:
        self.active.name = name

    def recolor_active(self, hex_color: str) -> RGB:
        self.active.color = hex_color
        return self.active.color_rgb

    def add_point(self, dataset_index: int, point: Point) -> bool:
        if not self._valid(dataset_index):
            return False
        self._datasets[dataset_index].points.append((float(point[0]), float(point[1])))
        return True

    def move_point(self, dataset_index: int, point_index: int, new_point: Point) -> bool:
        if not self._valid(dataset_index, point_index):
            return False
        self._datasets[dataset_index].points[point_index] = (float(new_point[0]), float(new_point[1]))
        return True

    def delete_point(self, dataset_index: int, point_index: int) -> bool:
        if not self._valid(dataset_index, point_index):
            return False
        del self._datasets[dataset_index].points[point_index]
        return True

    def delete_by_selection(self, selection: Optional[Selection]) -> bool:
        if selection is None:
            return False
        di, pi = selection
        return self.delete_point(di, pi)

    def replace_points(self, dataset_index: int, points: Sequence[Point]) -> bool:
        if not self._valid(dataset_index):
            return False
        self._datasets[dataset_index].points = [(float(x), float(y)) for (x, y) in points]
        return True

    def clear_points(self) -> None:
        for ds in self._datasets:
            ds.points = []

    def total_points(self) -> int:
        return sum(len(ds.points) for ds in self._datasets)

    def reset(self, datasets: Sequence[Dataset] = ()) -> None:
        """Load datasets into the slots in order; remaining slots get defaults."""
        slots = [Dataset.default(i) for i in range(MAX_DATASETS)]
        for i, ds in enumerate(list(datasets)[:MAX_DATASETS]):
            slots[i] = ds
        self._datasets = tuple(slots)
        self._active = 0
