
from __future__ import annotations

import csv
import io
from typing import Iterable, List, Tuple

from .data_model import Dataset
from .errors import ExportError

HEADER = ["dataset", "x", "y"]
LINE_TERMINATOR = "\n"


def datasets_to_long_rows(datasets: Iterable[Dataset]) -> List[Tuple[str, float, float]]:
    rows: List[Tuple[str, float, float]] = []
    for ds in datasets:
        for (x, y) in ds.points:
            rows.append((ds.name, float(x), float(y)))
    return rows


def csv_string(datasets: Iterable[Dataset], delimiter: str = ",") -> str:
    buf = io.StringIO()
    w = csv.writer(buf, delimiter=delimiter, lineterminator=LINE_TERMINATOR)
    w.writerow(HEADER)
    w.writerows(datasets_to_long_rows(datasets))
    return buf.getvalue()


def write_csv(path: str, datasets: Iterable[Dataset], delimiter: str = ",") -> int:
    rows = datasets_to_long_rows(datasets)
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f, delimiter=delimiter, lineterminator=LINE_TERMINATOR)
            w.writerow(HEADER)
            w.writerows(rows)
    except OSError as e:
        raise ExportError(f"could not write {path}: {e}") from e
    return len(rows)
