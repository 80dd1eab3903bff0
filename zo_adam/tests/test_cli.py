from __future__ import annotations

import json
from pathlib import Path

from zo_adam.perf_timings import list_timing_csvs, read_timings_csv
from zo_adam.scripts.run_optimizer import build_config, main, parse_args


def test_parse_args_maps_to_config() -> None:
    cfg = build_config(
        parse_args(["--objective", "rastrigin", "--dimension", "5", "--precision", "float32", "--no-guard-degenerate"])
    )
    assert cfg.objective == "rastrigin"
    assert cfg.dimension == 5
    assert cfg.dtype.name == "float32"
    assert cfg.guard_degenerate is False
    assert cfg.save_plots is False


def test_main_writes_artifacts(tmp_path: Path) -> None:
    code = main(
        [
            "--artifacts-dir",
            str(tmp_path),
            "--max-generations",
            "3",
            "--checkpoint-every",
            "2",
            "--timings",
            "--save-plots",
            "--log-level",
            "WARNING",
        ]
    )
    assert code == 0

    results = json.loads((tmp_path / "results.json").read_text(encoding="utf-8"))
    assert results["generations"] == 3
    assert len(results["best"]["vector"]) == 2

    metrics = json.loads((tmp_path / "metrics.json").read_text(encoding="utf-8"))
    assert len(metrics["generation_history"]) == 3
    assert (tmp_path / "config.json").exists()
    assert (tmp_path / "checkpoint_gen_0002.json").exists()
    assert (tmp_path / "progress.png").exists()

    csvs = list_timing_csvs(tmp_path / "timings")
    assert len(csvs) == 1
    sections = {row["section"] for row in read_timings_csv(csvs[0])}
    assert {"generation", "batch_eval", "bootstrap", "resample"} <= sections


def test_main_resumes_from_checkpoint(tmp_path: Path) -> None:
    first = tmp_path / "first"
    main(["--artifacts-dir", str(first), "--max-generations", "4", "--checkpoint-every", "2", "--log-level", "WARNING"])
    second = tmp_path / "second"
    main(
        [
            "--artifacts-dir",
            str(second),
            "--max-generations",
            "4",
            "--resume-from",
            str(first / "checkpoint_gen_0002.json"),
            "--log-level",
            "WARNING",
        ]
    )
    a = json.loads((first / "results.json").read_text(encoding="utf-8"))
    b = json.loads((second / "results.json").read_text(encoding="utf-8"))
    assert a["state"] == b["state"]
