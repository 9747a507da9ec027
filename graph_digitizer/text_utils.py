from __future__ import annotations

import math
import re
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional


def safe_parse_float(text: Optional[str]) -> Optional[float]:
    # Empty or unparsable entry text means "not provided yet".
    s = (text or "").strip()
    if not s:
        return None
    try:
        v = float(s)
    except ValueError:
        return None
    if not math.isfinite(v):
        return None
    return v


def sanitize_filename(s: Optional[str]) -> str:
    s = (s or "").strip()
    if not s:
        return ""
    t = re.sub(r"[^A-Za-z0-9_.-]", "_", s)
    t = re.sub(r"_+", "_", t)
    t = re.sub(r"^[_.]+|[_.]+$", "", t)
    return t


def default_basename(title: Optional[str], now: Optional[datetime] = None) -> str:
    base = sanitize_filename(title)
    if base:
        return base
    now = now or datetime.now()
    return "graphdigitizer_export_" + now.strftime("%Y-%m-%d_%H%M%S")


def preferred_downloads_dir() -> Path:
    try:
        d = Path.home() / "Downloads"
    except RuntimeError:  # no resolvable home directory
        return Path(tempfile.gettempdir())
    if d.is_dir():
        return d
    return Path(tempfile.gettempdir())


def default_filename(
    title: Optional[str],
    ext: str,
    *,
    directory: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> Path:
    ext = ext.lstrip(".").lower()
    name = default_basename(title, now)
    if not name.lower().endswith("." + ext):
        name = f"{name}.{ext}"
    return Path(directory if directory is not None else preferred_downloads_dir()) / name
