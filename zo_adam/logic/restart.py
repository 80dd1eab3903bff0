"""
Politica de reinicio de momentos ante estancamiento.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional

import numpy as np

from ..core.errors import NumericCollapseError
from .state import AdamState


class RestartPolicy:
    """
    Lleva la cuenta de generaciones sin mejora y reinicia los momentos Adam.

    Reiniciar conserva el vector aprendido: la siguiente generacion vuelve a
    anclar el mejor miembro de la poblacion y los pasos adaptativos se
    recalculan desde cero.
    """

    def __init__(
        self,
        window: int,
        tol: float = 0.0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.window = int(window)
        self.tol = float(tol)
        self.logger = logger or logging.getLogger("zo_adam")
        self.best_score = -math.inf
        self.stagnation_counter = 0

    def observe(self, score: float) -> bool:
        """Registra el mejor puntaje de la generacion; True si hubo mejora."""
        if score > self.best_score + self.tol:
            self.best_score = float(score)
            self.stagnation_counter = 0
            return True
        self.stagnation_counter += 1
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "best_score": None if math.isinf(self.best_score) else self.best_score,
            "stagnation_counter": self.stagnation_counter,
        }

    def load_dict(self, payload: Mapping[str, Any]) -> None:
        best = payload.get("best_score")
        self.best_score = -math.inf if best is None else float(best)
        self.stagnation_counter = int(payload.get("stagnation_counter", 0))

    def should_restart(self) -> bool:
        return self.window > 0 and self.stagnation_counter >= self.window

    def on_stagnation(self, state: AdamState) -> None:
        state.reset_state()
        self.stagnation_counter = 0
        self.logger.info("Stagnation detected; Adam moments reset (vector kept).")

    def on_non_finite(self, state: AdamState) -> None:
        """Recupera un estado con momentos no finitos o aborta si el vector colapso."""
        if not np.all(np.isfinite(state.vector())):
            raise NumericCollapseError("El vector del estado dejo de ser finito.")
        self.logger.warning("Non-finite Adam moments detected; resetting state.")
        state.reset_state()
