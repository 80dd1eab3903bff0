#!/usr/bin/env python3
"""
Ejecuta el optimizador de orden cero sobre un objetivo de referencia.

Ejemplo:
    zo-adam --objective rosenbrock --dimension 4 --alpha 0.05 --max-generations 500
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from zo_adam.core.config import Config
from zo_adam.core.telemetry import Reporter, setup_logger
from zo_adam.logic.controller import OptimizationController
from zo_adam.objectives import BENCHMARKS, get_objective
from zo_adam.perf_timings import (
    configure_global_logger,
    read_timings_csv,
    shutdown_logger,
    summarize_sections,
)
from zo_adam.presentation.visualization import ProgressPlotter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    defaults = Config()
    parser = argparse.ArgumentParser(description="Zeroth-order Adam optimizer")

    parser.add_argument("--objective", choices=sorted(BENCHMARKS), default=defaults.objective)
    parser.add_argument("--objective-shift", type=float, default=defaults.objective_shift)
    parser.add_argument("--dimension", type=int, default=defaults.dimension)
    parser.add_argument("--starting-pop-size", type=int, default=defaults.starting_pop_size)
    parser.add_argument("--sustain-pop-size", type=int, default=defaults.sustain_pop_size)

    parser.add_argument("--alpha", type=float, default=defaults.alpha)
    parser.add_argument("--epsilon", type=float, default=defaults.epsilon)
    parser.add_argument("--beta-1", type=float, default=defaults.beta_1)
    parser.add_argument("--beta-2", type=float, default=defaults.beta_2)
    parser.add_argument("--precision", choices=["float32", "float64"], default=defaults.precision)
    parser.add_argument(
        "--no-guard-degenerate",
        action="store_true",
        help="Deja el cociente no finito en ejes degenerados en lugar de usar gradiente 0.",
    )

    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--max-generations", type=int, default=defaults.max_generations)
    parser.add_argument("--stagnation-window", type=int, default=defaults.stagnation_window)
    parser.add_argument("--stagnation-tol", type=float, default=defaults.stagnation_tol)
    parser.add_argument("--target-score", type=float, default=None)
    parser.add_argument("--time-budget-s", type=float, default=defaults.time_budget_s)
    parser.add_argument("--eval-budget", type=int, default=defaults.eval_budget)

    parser.add_argument("--n-jobs", type=int, default=defaults.n_jobs)

    parser.add_argument("--artifacts-dir", type=str, default=defaults.artifacts_dir)
    parser.add_argument("--checkpoint-every", type=int, default=defaults.checkpoint_every)
    parser.add_argument("--resume-from", type=str, default=None)
    parser.add_argument("--save-plots", action="store_true")
    parser.add_argument("--show-plots", action="store_true")
    parser.add_argument("--timings", action="store_true", help="Registra timings por seccion en CSV.")
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    return Config(
        alpha=args.alpha,
        epsilon=args.epsilon,
        beta_1=args.beta_1,
        beta_2=args.beta_2,
        dimension=args.dimension,
        starting_pop_size=args.starting_pop_size,
        sustain_pop_size=args.sustain_pop_size,
        guard_degenerate=not args.no_guard_degenerate,
        precision=args.precision,
        objective=args.objective,
        objective_shift=args.objective_shift,
        seed=args.seed,
        max_generations=args.max_generations,
        stagnation_window=args.stagnation_window,
        stagnation_tol=args.stagnation_tol,
        target_score=args.target_score,
        time_budget_s=args.time_budget_s,
        eval_budget=args.eval_budget,
        n_jobs=args.n_jobs,
        artifacts_dir=args.artifacts_dir,
        checkpoint_every=args.checkpoint_every,
        resume_from=args.resume_from,
        save_plots=args.save_plots or args.show_plots,
        headless=not args.show_plots,
        timings_enabled=args.timings,
        timings_dir=os.path.join(args.artifacts_dir, "timings"),
    )


def log_timing_summary(logger: logging.Logger, timing_logger) -> None:
    timing_logger.flush()
    if not timing_logger.path.exists():
        return
    summary = summarize_sections(read_timings_csv(timing_logger.path))
    for section, entry in sorted(summary.items(), key=lambda kv: -kv[1]["total_us"]):
        logger.info(
            "Timing %-18s calls=%5d total=%10.1fms mean=%8.1fus",
            section,
            entry["calls"],
            entry["total_us"] / 1000.0,
            entry["mean_us"],
        )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger = setup_logger(args.log_level)
    cfg = build_config(args)

    reporter = Reporter(cfg.artifacts_dir, logger=logger)
    reporter.bootstrap(cfg)
    timing_logger = None
    if cfg.timings_enabled:
        timing_logger = configure_global_logger(enabled=True, base_dir=cfg.timings_dir)

    objective = get_objective(cfg.objective, cfg.objective_shift)
    controller = OptimizationController(cfg, objective, logger=logger, reporter=reporter)
    result = controller.run()

    reporter.save_results(result)
    reporter.save_metrics(controller.metrics)
    logger.info("Optimizacion finalizada. Resultado: %s", result["best"])

    if cfg.save_plots:
        plot_path = os.path.join(cfg.artifacts_dir, "progress.png")
        ProgressPlotter(headless=cfg.headless).plot_history(controller.metrics.to_dict(), path=plot_path)
        logger.info("Grafica guardada en %s", plot_path)
    if timing_logger is not None:
        log_timing_summary(logger, timing_logger)
        shutdown_logger()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
