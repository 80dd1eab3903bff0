from __future__ import annotations

import atexit
import csv
import json
import os
import sys
import threading
import time
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

CSV_HEADER: list[str] = [
    "run_id",
    "generation",
    "section",
    "start_ns",
    "end_ns",
    "duration_us",
    "extra",
]


def _env_flag(name: str, default: str = "0") -> bool:
    raw = os.getenv(name, default)
    if raw is None:
        return False
    return raw.strip().lower() not in {"0", "false", "off", "no", ""}


PERF_TIMINGS_ENABLED = _env_flag("ZO_ADAM_TIMINGS", "0")

DEFAULT_BUFFER_SIZE = 64
DEFAULT_TIMINGS_DIR = Path(os.getenv("ZO_ADAM_TIMINGS_DIR", "artifacts/timings"))


@dataclass(frozen=True)
class TimingRecord:
    run_id: str
    generation: int
    section: str
    start_ns: int
    end_ns: int
    duration_us: int
    extra: str

    def as_row(self) -> list[Any]:
        return [
            self.run_id,
            str(self.generation),
            self.section,
            str(self.start_ns),
            str(self.end_ns),
            str(self.duration_us),
            self.extra,
        ]


class TimingLogger:
    """
    Buffered CSV timing logger for optimizer sections.
    """

    def __init__(
        self,
        *,
        run_id: Optional[str] = None,
        enabled: bool = True,
        base_dir: Optional[Path | str] = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self.enabled = bool(enabled)
        self.run_id = run_id or str(uuid.uuid4())
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.base_dir = Path(base_dir) if base_dir else DEFAULT_TIMINGS_DIR
        self.buffer_size = max(1, int(buffer_size))
        self.csv_path = self.base_dir / f"timings_{self.run_id}_{self.timestamp}.csv"
        self._buffer: list[TimingRecord] = []
        self._lock = threading.Lock()
        self._csv_file: Optional[Any] = None
        self._csv_writer: Optional[Any] = None
        self._closed = False
        atexit.register(self.close)

    @property
    def path(self) -> Path:
        return self.csv_path

    def record(
        self,
        *,
        section: str,
        start_ns: Optional[int],
        end_ns: Optional[int],
        generation: int = -1,
        extra: Optional[Any] = None,
    ) -> None:
        if not self.enabled:
            return
        try:
            start = int(start_ns if start_ns is not None else time.perf_counter_ns())
            end = int(end_ns if end_ns is not None else time.perf_counter_ns())
            if end < start:
                end = start
            record = TimingRecord(
                run_id=self.run_id,
                generation=int(generation),
                section=str(section),
                start_ns=start,
                end_ns=end,
                duration_us=max(1, (end - start) // 1_000),
                extra=self._serialize_extra(extra),
            )
            with self._lock:
                self._buffer.append(record)
                if len(self._buffer) >= self.buffer_size:
                    self._flush_locked()
        except (OSError, TypeError, ValueError) as exc:
            self._log_error(exc)

    def flush(self) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._flush_locked()

    def close(self) -> None:
        if not self.enabled:
            return
        with self._lock:
            if self._closed:
                return
            self._flush_locked()
            if self._csv_file is not None:
                self._csv_file.close()
                self._csv_file = None
            self._closed = True

    # Internal helpers ---------------------------------------------------
    def _flush_locked(self) -> None:
        if not self._buffer:
            return
        pending = self._buffer
        self._buffer = []
        try:
            if self._csv_file is None:
                self.base_dir.mkdir(parents=True, exist_ok=True)
                existed = self.csv_path.exists()
                self._csv_file = self.csv_path.open("a", newline="", encoding="utf-8")
                self._csv_writer = csv.writer(self._csv_file)
                if not existed:
                    self._csv_writer.writerow(CSV_HEADER)
            for record in pending:
                self._csv_writer.writerow(record.as_row())
            self._csv_file.flush()
        except OSError as exc:
            self._log_error(exc)

    @staticmethod
    def _serialize_extra(extra: Optional[Any]) -> str:
        if extra is None:
            return "{}"
        if isinstance(extra, str):
            return extra.strip() or "{}"
        return json.dumps(extra, separators=(",", ":"), default=str)

    @staticmethod
    def _log_error(exc: Exception) -> None:
        sys.stderr.write(f"[perf_timings] logger error: {exc}\n")


_GLOBAL_LOGGER: Optional[TimingLogger] = None
_GLOBAL_LOCK = threading.Lock()


def get_timing_logger() -> TimingLogger:
    global _GLOBAL_LOGGER
    with _GLOBAL_LOCK:
        if _GLOBAL_LOGGER is None:
            _GLOBAL_LOGGER = TimingLogger(enabled=PERF_TIMINGS_ENABLED)
        return _GLOBAL_LOGGER


def configure_global_logger(**kwargs: Any) -> TimingLogger:
    global _GLOBAL_LOGGER
    with _GLOBAL_LOCK:
        if _GLOBAL_LOGGER is not None:
            _GLOBAL_LOGGER.close()
        _GLOBAL_LOGGER = TimingLogger(**kwargs)
        return _GLOBAL_LOGGER


def shutdown_logger() -> None:
    global _GLOBAL_LOGGER
    with _GLOBAL_LOCK:
        if _GLOBAL_LOGGER is not None:
            _GLOBAL_LOGGER.close()
            _GLOBAL_LOGGER = None
