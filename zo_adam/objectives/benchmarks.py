"""
Funciones objetivo de referencia expresadas como puntajes (mayor = mejor).

Cada funcion clasica de minimizacion se niega para que el maximo global
sea 0 en `x = shift`.
"""

from __future__ import annotations

from typing import Callable, Dict

import numpy as np

Objective = Callable[[np.ndarray], float]


def sphere(x: np.ndarray) -> float:
    return -float(np.sum(np.square(x)))


def rosenbrock(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    if x.shape[0] < 2:
        return -float((1.0 - x[0]) ** 2)
    return -float(np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2))


def rastrigin(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    return -float(10.0 * x.shape[0] + np.sum(x ** 2 - 10.0 * np.cos(2.0 * np.pi * x)))


def ackley(x: np.ndarray) -> float:
    x = np.asarray(x, dtype=float)
    n = x.shape[0]
    term1 = -20.0 * np.exp(-0.2 * np.sqrt(np.sum(x ** 2) / n))
    term2 = -np.exp(np.sum(np.cos(2.0 * np.pi * x)) / n)
    return -float(term1 + term2 + 20.0 + np.e)


BENCHMARKS: Dict[str, Objective] = {
    "sphere": sphere,
    "rosenbrock": rosenbrock,
    "rastrigin": rastrigin,
    "ackley": ackley,
}


def get_objective(name: str, shift: float = 0.0) -> Objective:
    """Devuelve el objetivo `name` con el optimo desplazado a `shift` en cada eje."""
    try:
        base = BENCHMARKS[name.lower()]
    except KeyError as exc:
        raise ValueError(
            f"Objetivo '{name}' desconocido; opciones: {sorted(BENCHMARKS)}"
        ) from exc
    if shift == 0.0:
        return base

    def shifted(x: np.ndarray) -> float:
        return base(np.asarray(x, dtype=float) - shift)

    shifted.__name__ = f"{base.__name__}_shifted"
    return shifted
