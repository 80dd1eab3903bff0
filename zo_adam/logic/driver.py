"""
Driver de poblacion: muestreo inicial, anclaje del campeon, gradiente
sustituto y remuestreo alrededor del vector del estado.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..core.errors import ParamCountError, PopulationContractError
from ..perf_timings.timers import time_block
from .gradient import GradientEstimate, generate_gradient_at_point
from .params import AdamParams
from .state import AdamState

ArrayLike = Union[Sequence[float], np.ndarray]


@dataclass
class GenerationReport:
    """Resumen de una llamada a `update_vectors_and_state`."""

    generation: int
    step: int
    bootstrap: bool
    champion_index: int
    center_score: float
    best_score: float
    gradient: np.ndarray
    degenerate_axes: List[int] = field(default_factory=list)
    population_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "generation": self.generation,
            "step": self.step,
            "bootstrap": self.bootstrap,
            "champion_index": self.champion_index,
            "center_score": self.center_score,
            "best_score": self.best_score,
            "gradient_norm": float(np.linalg.norm(self.gradient)),
            "degenerate_axes": list(self.degenerate_axes),
            "population_size": self.population_size,
        }


class AdamDriver:
    def __init__(
        self,
        starting_population_size: int,
        sustain_population_size: int,
        state: AdamState,
        rng: np.random.Generator,
        *,
        guard_degenerate: bool = True,
        ascend: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        _check_population_size(starting_population_size, "starting_population_size")
        _check_population_size(sustain_population_size, "sustain_population_size")
        self.logger = logger or logging.getLogger("zo_adam")
        self.starting_population_size = int(starting_population_size)
        self.sustain_population_size = int(sustain_population_size)
        self.guard_degenerate = bool(guard_degenerate)
        self.ascend = bool(ascend)
        # arranque en frio: N(0, 1) sin centrar en el vector del estado
        self._vectors = rng.standard_normal(
            (self.starting_population_size, state.vector_len()), dtype=state.dtype
        )

    @classmethod
    def from_population(
        cls,
        vectors: ArrayLike,
        sustain_population_size: int,
        *,
        guard_degenerate: bool = True,
        ascend: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> "AdamDriver":
        """Reconstruye un driver a partir de una poblacion existente (p. ej. checkpoint)."""
        population = np.array(vectors)
        if population.ndim != 2 or population.shape[0] < 1 or population.shape[1] < 1:
            raise PopulationContractError("La poblacion debe ser una matriz (n, d) no vacia.")
        _check_population_size(sustain_population_size, "sustain_population_size")
        driver = cls.__new__(cls)
        driver.logger = logger or logging.getLogger("zo_adam")
        driver.starting_population_size = int(population.shape[0])
        driver.sustain_population_size = int(sustain_population_size)
        driver.guard_degenerate = bool(guard_degenerate)
        driver.ascend = bool(ascend)
        if population.dtype not in (np.float32, np.float64):
            population = population.astype(np.float64)
        driver._vectors = population
        return driver

    # Acceso a la poblacion ----------------------------------------------
    def vectors(self) -> np.ndarray:
        return self._vectors.copy()

    def vector(self, index: int) -> np.ndarray:
        return self._vectors[index].copy()

    def set_vector(self, index: int, values: ArrayLike) -> None:
        arr = np.asarray(values, dtype=self._vectors.dtype).reshape(-1)
        if arr.shape[0] != self.vector_len():
            raise ParamCountError(self.vector_len(), arr.shape[0])
        self._vectors[index] = arr

    def population_size(self) -> int:
        return int(self._vectors.shape[0])

    def vector_len(self) -> int:
        return int(self._vectors.shape[1])

    # Ciclo generacional -------------------------------------------------
    def resample_vectors(
        self,
        state: AdamState,
        params: AdamParams,
        count: int,
        rng: np.random.Generator,
        *,
        generation: int = -1,
    ) -> None:
        """
        Reemplaza la poblacion por `count` vectores alrededor del estado.

        La media es el vector del estado y la desviacion de cada dimension es
        sqrt(alpha * v_hat). El miembro 0 es la media exacta (elite sin ruido).
        """
        _check_population_size(count, "count")
        with time_block("resample", generation=generation, extra={"count": int(count)}):
            mean = state.vector()
            stdev = np.sqrt(state.v_hat(params) * params.alpha)
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(
                    "Resample | mean=%s | stdev=%s",
                    np.array2string(mean[:4], precision=4),
                    np.array2string(stdev[:4], precision=4),
                )
            samples = rng.normal(mean, stdev, size=(int(count) - 1, mean.shape[0]))
            self._vectors = np.vstack([mean[None, :], samples.astype(mean.dtype, copy=False)])

    def anchor_champion(self, scores: ArrayLike, state: AdamState) -> Tuple[int, np.ndarray]:
        """
        Copia el mejor vector de la poblacion al estado y lo mueve al indice 0.

        Devuelve el indice original del campeon y los puntajes reordenados.
        """
        scores_arr = self._check_scores(scores)
        if state.vector_len() != self.vector_len():
            raise ParamCountError(state.vector_len(), self.vector_len())
        champion = int(np.argmax(scores_arr))
        state.set_vector(self._vectors[champion])
        if champion != 0:
            self._vectors[[0, champion]] = self._vectors[[champion, 0]]
            scores_arr[[0, champion]] = scores_arr[[champion, 0]]
        return champion, scores_arr

    def update_vectors_and_state(
        self,
        scores: ArrayLike,
        state: AdamState,
        params: AdamParams,
        rng: np.random.Generator,
        *,
        generation: int = -1,
    ) -> GenerationReport:
        """
        Ejecuta una generacion completa con los puntajes de `vectors()`.

        Si el estado no ha dado ningun paso (t == 0) el mejor vector pasa a
        ser el ancla del estado. El indice 0 es siempre el centro del
        gradiente sustituto.
        """
        if state.vector_len() != self.vector_len():
            raise ParamCountError(state.vector_len(), self.vector_len())
        scores_arr = self._check_scores(scores)

        bootstrap = state.t() == 0
        champion = 0
        if bootstrap:
            with time_block("bootstrap", generation=generation):
                champion, scores_arr = self.anchor_champion(scores_arr, state)
            self.logger.debug(
                "Bootstrap | champion=%d | score=%.6g", champion, float(scores_arr[0])
            )

        with time_block(
            "gradient_estimate",
            generation=generation,
            extra={"samples": self.population_size() - 1},
        ):
            estimate: GradientEstimate = generate_gradient_at_point(
                self._vectors[0],
                scores_arr[0],
                self._vectors[1:],
                scores_arr[1:],
                guard_degenerate=self.guard_degenerate,
            )
        if estimate.degenerate_axes:
            self.logger.warning(
                "Degenerate population on %d axis/axes %s (guarded=%s)",
                len(estimate.degenerate_axes),
                estimate.degenerate_axes[:8],
                self.guard_degenerate,
            )

        with time_block("moment_update", generation=generation):
            # con ascend la pendiente del puntaje se invierte para que Adam suba
            loss_gradient = -estimate.gradient if self.ascend else estimate.gradient
            state.update(loss_gradient, params)

        report = GenerationReport(
            generation=generation,
            step=state.t(),
            bootstrap=bootstrap,
            champion_index=champion,
            center_score=float(scores_arr[0]),
            best_score=float(np.max(scores_arr)),
            gradient=estimate.gradient,
            degenerate_axes=estimate.degenerate_axes,
            population_size=self.sustain_population_size,
        )

        self.resample_vectors(
            state, params, self.sustain_population_size, rng, generation=generation
        )
        return report

    def _check_scores(self, scores: ArrayLike) -> np.ndarray:
        scores_arr = np.array(scores, dtype=self._vectors.dtype).reshape(-1)
        if self.population_size() < 1:
            raise PopulationContractError("La poblacion esta vacia.")
        if scores_arr.shape[0] != self.population_size():
            raise PopulationContractError(
                f"Cantidad de puntajes ({scores_arr.shape[0]}) no coincide con la poblacion "
                f"({self.population_size()})."
            )
        if np.any(np.isnan(scores_arr)):
            raise PopulationContractError("Los puntajes no pueden contener NaN.")
        return scores_arr

    def __repr__(self) -> str:
        return (
            f"AdamDriver(population={self.population_size()}, dim={self.vector_len()}, "
            f"sustain={self.sustain_population_size})"
        )


def _check_population_size(value: int, name: str) -> None:
    if int(value) < 1:
        raise PopulationContractError(f"{name} debe ser >= 1 (recibido {value}).")
