from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .calibration import AxisRange
from .data_model import Dataset
from .errors import DocumentError, ExportError

log = logging.getLogger(__name__)


@dataclass
class DigitizerDocument:
    """Everything that goes into a saved JSON file."""

    title: str = ""
    xlabel: str = ""
    ylabel: str = ""
    axis_range: AxisRange = field(default_factory=AxisRange)
    datasets: List[Dataset] = field(default_factory=list)


def document_to_dict(doc: DigitizerDocument) -> Dict[str, Any]:
    r = doc.axis_range
    return {
        "title": doc.title,
        "xlabel": doc.xlabel,
        "ylabel": doc.ylabel,
        "x_min": float(r.x_min),
        "x_max": float(r.x_max),
        "y_min": float(r.y_min),
        "y_max": float(r.y_max),
        "x_log": bool(r.x_log),
        "y_log": bool(r.y_log),
        "datasets": [
            {
                "name": ds.name,
                "color": ds.color,
                "points": [[float(x), float(y)] for (x, y) in ds.points],
            }
            for ds in doc.datasets
        ],
    }


def encode_json(doc: DigitizerDocument, indent: int = 2) -> str:
    # Strict JSON: NaN and Infinity have no representation.
    try:
        return json.dumps(document_to_dict(doc), indent=indent, allow_nan=False)
    except ValueError as e:
        raise ExportError(f"document holds a non-finite number: {e}") from e


def _number(obj: Dict[str, Any], key: str, default: float) -> float:
    v = obj.get(key, default)
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise DocumentError(f"'{key}' must be a number, got {v!r}")
    return float(v)


def _flag(obj: Dict[str, Any], key: str) -> bool:
    v = obj.get(key, False)
    if not isinstance(v, bool):
        raise DocumentError(f"'{key}' must be true or false, got {v!r}")
    return v


def _dataset_from_dict(i: int, d: Any) -> Dataset:
    if not isinstance(d, dict):
        raise DocumentError(f"datasets[{i}] must be an object")
    points = []
    for j, p in enumerate(d.get("points", [])):
        if not isinstance(p, (list, tuple)) or len(p) != 2:
            raise DocumentError(f"datasets[{i}].points[{j}] must be an [x, y] pair")
        x, y = p
        if isinstance(x, bool) or isinstance(y, bool) or not all(isinstance(v, (int, float)) for v in (x, y)):
            raise DocumentError(f"datasets[{i}].points[{j}] must hold numbers")
        points.append((float(x), float(y)))
    return Dataset(
        name=str(d.get("name", f"Dataset {i + 1}")),
        color=str(d.get("color", "#000000")),
        points=points,
    )


def document_from_dict(obj: Any) -> DigitizerDocument:
    if not isinstance(obj, dict):
        raise DocumentError("top level must be a JSON object")
    defaults = AxisRange()
    axis_range = AxisRange(
        x_min=_number(obj, "x_min", defaults.x_min),
        x_max=_number(obj, "x_max", defaults.x_max),
        y_min=_number(obj, "y_min", defaults.y_min),
        y_max=_number(obj, "y_max", defaults.y_max),
        x_log=_flag(obj, "x_log"),
        y_log=_flag(obj, "y_log"),
    )
    raw = obj.get("datasets", [])
    if not isinstance(raw, list):
        raise DocumentError("'datasets' must be a list")
    return DigitizerDocument(
        title=str(obj.get("title", "") or ""),
        xlabel=str(obj.get("xlabel", "") or ""),
        ylabel=str(obj.get("ylabel", "") or ""),
        axis_range=axis_range,
        datasets=[_dataset_from_dict(i, d) for i, d in enumerate(raw)],
    )


def _reject_constant(token: str) -> Any:
    raise DocumentError(f"invalid JSON: bare {token} is not a number")


def decode_json(text: str) -> DigitizerDocument:
    try:
        obj = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise DocumentError(f"invalid JSON: {e}") from e
    return document_from_dict(obj)


def write_json(path: str, doc: DigitizerDocument) -> None:
    text = encode_json(doc)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise ExportError(f"could not write {path}: {e}") from e


def read_json(path: str) -> DigitizerDocument:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"could not read {path}: {e}") from e
    doc = decode_json(text)
    log.info("read %d dataset(s) from %s", len(doc.datasets), path)
    return doc
