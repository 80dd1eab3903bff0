"""
Controlador continuo que coordina driver, estado Adam, evaluaciones y
politica de reinicio.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from ..core.config import Config, make_rng
from ..core.errors import NumericCollapseError
from ..core.telemetry import MetricsLogger, Reporter
from ..perf_timings.timers import time_block
from .driver import AdamDriver
from .fitness import FitnessEvaluator
from .params import AdamParams
from .restart import RestartPolicy
from .state import AdamState

Objective = Callable[[np.ndarray], float]


class OptimizationController:
    def __init__(
        self,
        cfg: Config,
        objective: Objective,
        logger: Optional[logging.Logger] = None,
        reporter: Optional[Reporter] = None,
    ) -> None:
        self.cfg = cfg
        self.objective = objective
        self.logger = logger or logging.getLogger("zo_adam")
        self.reporter = reporter
        self.metrics = MetricsLogger()
        self.params: AdamParams = cfg.adam_params()
        self.policy = RestartPolicy(cfg.stagnation_window, cfg.stagnation_tol, logger=self.logger)
        self.state: Optional[AdamState] = None
        self.driver: Optional[AdamDriver] = None
        self.rng: Optional[np.random.Generator] = None
        self.generation = 0
        self.best_vector: Optional[np.ndarray] = None
        self.best_score = -math.inf

    # Construccion / reanudacion ----------------------------------------
    def setup(self) -> None:
        if self.cfg.resume_from:
            self.restore(Reporter.load_json(self.cfg.resume_from))
            self.logger.info(
                "Resumed from %s at generation %d (t=%d)",
                self.cfg.resume_from,
                self.generation,
                self.state.t(),
            )
            return
        self.rng = make_rng(self.cfg.seed)
        self.state = AdamState(self.cfg.dimension, dtype=self.cfg.dtype)
        self.driver = AdamDriver(
            self.cfg.starting_pop_size,
            self.cfg.sustain_pop_size,
            self.state,
            self.rng,
            guard_degenerate=self.cfg.guard_degenerate,
            ascend=True,
            logger=self.logger,
        )
        self.generation = 0

    def snapshot(self) -> Dict[str, Any]:
        """
        Registro durable de la corrida: estado, poblacion, parametros, RNG,
        contadores de estancamiento y mejor global.
        """
        return {
            "generation": self.generation,
            "eval_count": self.metrics.eval_count,
            "params": self.params.to_dict(),
            "state": self.state.to_dict(),
            "population": [[float(x) for x in row] for row in self.driver.vectors()],
            "sustain_pop_size": self.driver.sustain_population_size,
            "rng_state": self.rng.bit_generator.state,
            "policy": self.policy.to_dict(),
            "best": {
                "vector": None if self.best_vector is None else [float(x) for x in self.best_vector],
                "score": None if self.best_vector is None else self.best_score,
            },
        }

    def restore(self, payload: Dict[str, Any]) -> None:
        self.state = AdamState.from_dict(payload["state"])
        self.params = AdamParams.from_dict(payload["params"])
        self.driver = AdamDriver.from_population(
            np.asarray(payload["population"], dtype=self.state.dtype),
            int(payload["sustain_pop_size"]),
            guard_degenerate=self.cfg.guard_degenerate,
            ascend=True,
            logger=self.logger,
        )
        self.rng = np.random.default_rng()
        self.rng.bit_generator.state = payload["rng_state"]
        self.generation = int(payload["generation"])
        self.metrics.eval_count = int(payload.get("eval_count", 0))
        if "policy" in payload:
            self.policy.load_dict(payload["policy"])
        best = payload.get("best") or {}
        if best.get("vector") is not None:
            self.best_vector = np.asarray(best["vector"], dtype=self.state.dtype)
            self.best_score = float(best["score"])

    def _penalize_failures(self, scores: List[float]) -> np.ndarray:
        """Sustituye los -inf de evaluaciones fallidas por el peor puntaje finito."""
        arr = np.asarray(scores, dtype=float)
        finite = np.isfinite(arr)
        if finite.all():
            return arr
        if not finite.any():
            raise NumericCollapseError(
                f"Ninguna evaluacion de la generacion {self.generation} fue finita."
            )
        self.logger.warning(
            "Generation %d | %d failed evaluation(s) scored as the worst finite score",
            self.generation,
            int((~finite).sum()),
        )
        return np.where(finite, arr, arr[finite].min())

    # Bucle principal ----------------------------------------------------
    def run(self) -> Dict[str, Any]:
        if self.state is None:
            self.setup()
        evaluator = FitnessEvaluator(
            self.objective, n_jobs=self.cfg.n_jobs, logger=self.logger
        )
        policy = self.policy

        stop_reason = "max_generations"
        run_start = time.time()
        self.logger.info(
            "Starting optimization | dim=%d | pop start/sustain=%d/%d | alpha=%g | max_generations=%d",
            self.state.vector_len(),
            self.driver.population_size(),
            self.driver.sustain_population_size,
            self.params.alpha,
            self.cfg.max_generations,
        )

        while True:
            if self.generation >= self.cfg.max_generations:
                stop_reason = "max_generations"
                break
            if time.time() - run_start > self.cfg.time_budget_s:
                stop_reason = "time_budget"
                break
            if self.metrics.eval_count >= self.cfg.eval_budget:
                stop_reason = "eval_budget"
                break

            with time_block("generation", generation=self.generation):
                X = self.driver.vectors()
                scores = evaluator.evaluate_batch(X, generation=self.generation)
                self.metrics.eval_count += len(scores)

                idx = int(np.argmax(scores))
                if scores[idx] > self.best_score:
                    self.best_score = float(scores[idx])
                    self.best_vector = X[idx].copy()

                report = self.driver.update_vectors_and_state(
                    self._penalize_failures(scores),
                    self.state,
                    self.params,
                    self.rng,
                    generation=self.generation,
                )

            if report.degenerate_axes:
                self.metrics.degenerate_generations += 1
            if not self.state.is_finite():
                policy.on_non_finite(self.state)
                self.metrics.restarts += 1

            improved = policy.observe(report.best_score)
            if policy.should_restart():
                policy.on_stagnation(self.state)
                self.metrics.restarts += 1

            self.logger.info(
                "Generation %d | t=%d | best=%.6g | center=%.6g | best_global=%.6g | |g|=%.3e%s",
                self.generation,
                report.step,
                report.best_score,
                report.center_score,
                self.best_score,
                float(np.linalg.norm(report.gradient)),
                " | improved" if improved else "",
            )
            self.metrics.best_score_per_generation.append(self.best_score)
            self.metrics.record_generation(
                {**report.to_dict(), "best_global": self.best_score, "timestamp": time.time()}
            )

            self.generation += 1
            self.metrics.generations = self.generation

            if (
                self.reporter is not None
                and self.cfg.checkpoint_every > 0
                and self.generation % self.cfg.checkpoint_every == 0
            ):
                self.reporter.checkpoint(self.generation, self.snapshot())

            if self.cfg.target_score is not None and self.best_score >= self.cfg.target_score:
                stop_reason = "target_score"
                break

        self.metrics.objective_calls = evaluator.objective_calls
        self.metrics.evaluation_failures = evaluator.failures
        self.metrics.mark_phase("completed")
        self.logger.info(
            "Optimization completed (%s) | generations=%d | evals=%d | best=%.6g | wall=%.1fs",
            stop_reason,
            self.generation,
            self.metrics.eval_count,
            self.best_score,
            time.time() - run_start,
        )

        has_best = self.best_vector is not None
        return {
            "status": "completed",
            "stop_reason": stop_reason,
            "best": {
                "vector": [float(x) for x in self.best_vector] if has_best else None,
                "score": self.best_score if has_best else None,
            },
            "state": self.state.to_dict(),
            "evals": self.metrics.eval_count,
            "generations": self.generation,
        }
