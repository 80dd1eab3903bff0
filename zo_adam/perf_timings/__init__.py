"""
Utilities for high-resolution performance instrumentation of the optimizer.
"""

from __future__ import annotations

from .io_utils import list_timing_csvs, read_timings_csv, summarize_sections
from .logger import (
    CSV_HEADER,
    PERF_TIMINGS_ENABLED,
    TimingLogger,
    configure_global_logger,
    get_timing_logger,
    shutdown_logger,
)
from .timers import time_block

__all__ = [
    "CSV_HEADER",
    "PERF_TIMINGS_ENABLED",
    "TimingLogger",
    "configure_global_logger",
    "get_timing_logger",
    "shutdown_logger",
    "time_block",
    "list_timing_csvs",
    "read_timings_csv",
    "summarize_sections",
]
