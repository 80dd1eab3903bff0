"""
Evaluador de fitness por lotes para la poblacion del driver.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np
from joblib import Parallel, delayed

from ..perf_timings.timers import time_block

Objective = Callable[[np.ndarray], float]


class FitnessEvaluator:
    def __init__(
        self,
        objective: Objective,
        *,
        n_jobs: int = 1,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.objective = objective
        self.n_jobs = int(n_jobs)
        self.logger = logger or logging.getLogger("zo_adam")
        self.objective_calls = 0
        self.failures = 0

    def evaluate_batch(
        self,
        candidates: np.ndarray,
        *,
        generation: int = -1,
        return_details: bool = False,
    ) -> Union[List[float], Tuple[List[float], List[Dict[str, Any]]]]:
        """
        Puntua cada vector en orden. Un objetivo que falla o devuelve NaN
        recibe -inf para que nunca sea elegido como campeon.
        """
        X = np.asarray(candidates)
        if X.shape[0] == 0:
            return ([], []) if return_details else []

        with time_block(
            "batch_eval",
            generation=generation,
            extra={"size": int(X.shape[0]), "n_jobs": self.n_jobs},
        ):
            if self.n_jobs != 1 and X.shape[0] > 1:
                outcomes = Parallel(n_jobs=self.n_jobs, backend="threading")(
                    delayed(self._evaluate_one)(row) for row in X
                )
            else:
                outcomes = [self._evaluate_one(row) for row in X]

        self.objective_calls += len(outcomes)
        scores = [fit for fit, _ in outcomes]
        self.failures += sum(1 for _, status in outcomes if status != "ok")
        if return_details:
            details = [
                {"index": idx, "fitness": fit, "status": status}
                for idx, (fit, status) in enumerate(outcomes)
            ]
            return scores, details
        return scores

    def _evaluate_one(self, vector: np.ndarray) -> Tuple[float, str]:
        try:
            fit = float(self.objective(vector))
        except Exception as exc:  # noqa: BLE001
            self.logger.debug("Objective failed for %s: %s", vector, exc, exc_info=True)
            return -math.inf, "error"
        if math.isnan(fit):
            self.logger.debug("Objective returned NaN for %s", vector)
            return -math.inf, "nan"
        return fit, "ok"
