"""
Estimador del gradiente sustituto a partir de una poblacion puntuada.

Para cada dimension i se ajusta, por minimos cuadrados, la pendiente de la
recta que pasa por el centro y relaciona el desplazamiento con la diferencia
de puntaje:

    gradient[i] = sum(dx * dy) / sum(dx ** 2)

    dx = vector[i] - center[i]
    dy = score - center_score

Cada dimension es un predictor univariado independiente; los terminos
cruzados se ignoran.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Union

import numpy as np

from ..core.errors import ParamCountError, PopulationContractError

ArrayLike = Union[Sequence[float], np.ndarray]


@dataclass
class GradientEstimate:
    """Gradiente sustituto y diagnosticos de la estimacion."""

    gradient: np.ndarray
    sample_count: int
    degenerate_axes: List[int] = field(default_factory=list)

    @property
    def norm(self) -> float:
        return float(np.linalg.norm(self.gradient))

    @property
    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.gradient)))


def generate_gradient_at_point(
    center: ArrayLike,
    center_score: float,
    vectors: ArrayLike,
    scores: ArrayLike,
    *,
    guard_degenerate: bool = True,
) -> GradientEstimate:
    """
    Estima el gradiente en `center` usando los pares (vector, puntaje).

    Un eje es degenerado cuando todos los vectores coinciden con el centro en
    esa coordenada (sum(dx ** 2) == 0), lo que incluye una poblacion sin
    vecinos. Con `guard_degenerate` el gradiente en ese eje es 0; sin el, se
    devuelve el cociente IEEE (NaN o infinito), que contamina los momentos
    del estado hasta un `reset_state`.
    """
    c = np.asarray(center)
    if c.ndim != 1:
        raise ValueError("El centro debe ser un vector unidimensional.")
    dtype = c.dtype if c.dtype in (np.float32, np.float64) else np.dtype(np.float64)
    c = c.astype(dtype, copy=False)
    dim = c.shape[0]

    X = np.asarray(vectors, dtype=dtype)
    if X.size == 0:
        X = X.reshape(0, dim)
    if X.ndim != 2:
        raise ValueError("Los vectores deben formar una matriz (n, d).")
    if X.shape[1] != dim:
        raise ParamCountError(dim, X.shape[1])
    y = np.asarray(scores, dtype=dtype).reshape(-1)
    if y.shape[0] != X.shape[0]:
        raise PopulationContractError(
            f"Cantidad de puntajes ({y.shape[0]}) no coincide con la de vectores ({X.shape[0]})."
        )

    dx = X - c
    dy = y - dtype.type(center_score)
    sum_dxdy = (dx * dy[:, None]).sum(axis=0)
    sum_dxdx = np.square(dx).sum(axis=0)

    degenerate = sum_dxdx == 0
    if guard_degenerate:
        safe = np.where(degenerate, dtype.type(1), sum_dxdx)
        gradient = np.where(degenerate, dtype.type(0), sum_dxdy / safe)
    else:
        with np.errstate(divide="ignore", invalid="ignore"):
            gradient = sum_dxdy / sum_dxdx

    return GradientEstimate(
        gradient=gradient.astype(dtype, copy=False),
        sample_count=int(X.shape[0]),
        degenerate_axes=[int(i) for i in np.flatnonzero(degenerate)],
    )
