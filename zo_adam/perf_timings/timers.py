from __future__ import annotations

import contextlib
import time
from typing import Any, Optional

from .logger import TimingLogger, get_timing_logger


class _TimingBlock(contextlib.ContextDecorator):
    def __init__(
        self,
        section: str,
        *,
        generation: Any = -1,
        extra: Optional[Any] = None,
    ) -> None:
        self.section = section
        self.generation = generation
        self.extra = extra
        self._start_ns: Optional[int] = None
        self._logger: Optional[TimingLogger] = None

    def __enter__(self) -> "_TimingBlock":
        logger = get_timing_logger()
        if not logger.enabled:
            return self
        self._logger = logger
        self._start_ns = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> bool:
        if self._logger is None or self._start_ns is None:
            return False
        end_ns = time.perf_counter_ns()
        payload = self.extra() if callable(self.extra) else self.extra
        self._logger.record(
            section=self.section,
            start_ns=self._start_ns,
            end_ns=end_ns,
            generation=int(self.generation),
            extra=payload,
        )
        self._logger = None
        self._start_ns = None
        return False


def time_block(
    section: str,
    *,
    generation: Any = -1,
    extra: Optional[Any] = None,
) -> _TimingBlock:
    """
    Context manager for ad-hoc timing blocks.
    """

    return _TimingBlock(section, generation=generation, extra=extra)

