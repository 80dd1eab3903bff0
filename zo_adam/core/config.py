"""
Configuracion base y utilidades de seeding para el optimizador de orden cero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

_SUPPORTED_DTYPES = {np.dtype(np.float32), np.dtype(np.float64)}


def resolve_dtype(precision: Any) -> np.dtype:
    """Normaliza la precision numerica ('float32' | 'float64' o un dtype)."""
    try:
        dtype = np.dtype(precision)
    except TypeError as exc:
        raise ValueError(f"Precision no reconocida: {precision!r}") from exc
    if dtype not in _SUPPORTED_DTYPES:
        raise ValueError(f"Precision '{dtype.name}' no soportada; use float32 o float64.")
    return dtype


@dataclass
class Config:
    """
    Parametros de Adam, de la poblacion y de los recursos de ejecucion.
    """

    # Adam
    alpha: float = 0.001
    epsilon: float = 1e-8
    beta_1: float = 0.9
    beta_2: float = 0.999

    # Poblacion
    dimension: int = 2
    starting_pop_size: int = 32
    sustain_pop_size: int = 16
    guard_degenerate: bool = True
    precision: str = "float64"  # "float64" | "float32"

    # Objetivo de referencia
    objective: str = "sphere"
    objective_shift: float = 0.0
    seed: int = 42

    # Optimizacion continua
    max_generations: int = 200
    stagnation_window: int = 25
    stagnation_tol: float = 1e-9
    target_score: Optional[float] = None
    time_budget_s: float = 600.0
    eval_budget: int = 100000

    # Backend
    n_jobs: int = 1

    # I/O
    artifacts_dir: str = "artifacts"
    checkpoint_every: int = 0
    resume_from: Optional[str] = None
    save_plots: bool = False
    headless: bool = True
    timings_enabled: bool = False
    timings_dir: Optional[str] = None

    @property
    def dtype(self) -> np.dtype:
        return resolve_dtype(self.precision)

    def adam_params(self):
        from ..logic.params import AdamParams

        return AdamParams(
            alpha=self.alpha,
            epsilon=self.epsilon,
            beta_1=self.beta_1,
            beta_2=self.beta_2,
        )


def make_rng(seed: Optional[int]) -> np.random.Generator:
    """Crea el generador pseudoaleatorio reproducible que se inyecta al driver."""
    return np.random.default_rng(seed)


if __name__ == "__main__":
    cfg = Config()
    print("Config de prueba:", cfg)
    print("Muestra:", make_rng(cfg.seed).standard_normal(3))
