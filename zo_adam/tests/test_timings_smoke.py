from __future__ import annotations

import csv
import time
from pathlib import Path

from zo_adam.perf_timings import (
    CSV_HEADER,
    configure_global_logger,
    read_timings_csv,
    shutdown_logger,
    summarize_sections,
    time_block,
)


def test_time_block_as_context_and_decorator(tmp_path: Path) -> None:
    logger = configure_global_logger(enabled=True, base_dir=tmp_path, buffer_size=1)

    with time_block("batch_eval", generation=1, extra={"test": True}):
        time.sleep(0.0001)

    @time_block("gradient_estimate", generation=3, extra=lambda: {"samples": 4})
    def _dummy(n: int) -> int:
        time.sleep(0.0001)
        return 5

    assert _dummy(3) == 5
    logger.flush()
    csv_path = logger.path
    assert csv_path.exists()

    with csv_path.open("r", encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))

    assert rows[0] == CSV_HEADER
    assert len(rows) == 3
    for row in rows[1:]:
        assert int(row[5]) >= 1

    parsed = read_timings_csv(csv_path)
    assert [r["generation"] for r in parsed] == [1, 3]
    assert parsed[0]["extra"] == {"test": True}
    assert parsed[1]["extra"] == {"samples": 4}
    summary = summarize_sections(parsed)
    assert summary["batch_eval"]["calls"] == 1
    shutdown_logger()


def test_disabled_logger_writes_nothing(tmp_path: Path) -> None:
    logger = configure_global_logger(enabled=False, base_dir=tmp_path)
    with time_block("resample"):
        pass
    logger.flush()
    assert not logger.path.exists()
    shutdown_logger()
