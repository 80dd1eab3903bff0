from __future__ import annotations

from pathlib import Path

from zo_adam.core.config import Config
from zo_adam.logic.controller import OptimizationController
from zo_adam.objectives import get_objective
from zo_adam.presentation import ProgressPlotter


def test_plot_history_writes_png(tmp_path: Path) -> None:
    cfg = Config(dimension=3, max_generations=8, stagnation_window=3, seed=5)
    controller = OptimizationController(cfg, get_objective("ackley"))
    controller.run()

    target = tmp_path / "plots" / "progress.png"
    fig = ProgressPlotter(headless=True).plot_history(controller.metrics.to_dict(), path=target)

    assert target.exists()
    assert target.stat().st_size > 0
    assert len(fig.axes) == 2


def test_plot_history_handles_empty_metrics(tmp_path: Path) -> None:
    target = tmp_path / "empty.png"
    ProgressPlotter().plot_history({}, path=target)
    assert target.exists()
