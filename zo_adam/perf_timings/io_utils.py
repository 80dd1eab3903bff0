from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .logger import CSV_HEADER, DEFAULT_TIMINGS_DIR


def list_timing_csvs(base_dir: Optional[Path | str] = None) -> List[Path]:
    base = Path(base_dir) if base_dir else DEFAULT_TIMINGS_DIR
    if not base.exists():
        return []
    return sorted(base.glob("timings_*.csv"), key=lambda p: p.stat().st_mtime)


def read_timings_csv(path: Path) -> List[dict[str, Any]]:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames != CSV_HEADER:
            raise ValueError(
                f"Archivo {path} tiene cabecera inesperada {reader.fieldnames}; se esperaba {CSV_HEADER}."
            )
        return [_cast_row(row) for row in reader]


def summarize_sections(rows: List[dict[str, Any]]) -> Dict[str, Dict[str, float]]:
    """Agrega llamadas y duracion total/media (us) por seccion."""
    summary: Dict[str, Dict[str, float]] = {}
    for row in rows:
        entry = summary.setdefault(row["section"], {"calls": 0, "total_us": 0.0})
        entry["calls"] += 1
        entry["total_us"] += row["duration_us"]
    for entry in summary.values():
        entry["mean_us"] = entry["total_us"] / entry["calls"]
    return summary


def _cast_row(raw: dict[str, Any]) -> dict[str, Any]:
    extra_raw = raw.get("extra") or ""
    extra: Any = {}
    if extra_raw.strip():
        try:
            extra = json.loads(extra_raw)
        except json.JSONDecodeError:
            extra = {"raw": extra_raw}
    return {
        "run_id": raw["run_id"],
        "generation": int(raw["generation"]),
        "section": raw["section"],
        "start_ns": int(raw["start_ns"]),
        "end_ns": int(raw["end_ns"]),
        "duration_us": int(raw["duration_us"]),
        "extra": extra,
    }
