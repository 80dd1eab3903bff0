"""
Estado del optimizador Adam: vector actual y estimaciones de momentos.

El estado es propiedad exclusiva del llamador y solo cambia a traves de
`update`, `reset_state` o los setters explicitos del vector.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence, Union

import numpy as np

from ..core.config import resolve_dtype
from ..core.errors import ParamCountError, StateNotStartedError
from .params import AdamParams

ArrayLike = Union[Sequence[float], np.ndarray]


class AdamState:
    def __init__(self, param_count: int, dtype: Any = np.float64) -> None:
        if int(param_count) < 1:
            raise ValueError(f"La dimension debe ser positiva (recibido {param_count}).")
        self._dtype = resolve_dtype(dtype)
        count = int(param_count)
        self._m = np.zeros(count, dtype=self._dtype)
        self._v = np.zeros(count, dtype=self._dtype)
        self._t = 0
        self._vector = np.zeros(count, dtype=self._dtype)

    # Accesores ----------------------------------------------------------
    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def vector_len(self) -> int:
        return int(self._m.shape[0])

    def vector(self) -> np.ndarray:
        return self._vector.copy()

    def set_vector(self, values: ArrayLike) -> None:
        arr = np.asarray(values, dtype=self._dtype).reshape(-1)
        if arr.shape[0] != self.vector_len():
            raise ParamCountError(self.vector_len(), arr.shape[0])
        self._vector[:] = arr

    def set_component(self, index: int, value: float) -> None:
        self._vector[index] = value

    def m(self) -> np.ndarray:
        return self._m.copy()

    def v(self) -> np.ndarray:
        return self._v.copy()

    def t(self) -> int:
        return self._t

    def m_hat(self, params: AdamParams) -> np.ndarray:
        return self._bias_corrected(self._m, params.beta_1)

    def v_hat(self, params: AdamParams) -> np.ndarray:
        return self._bias_corrected(self._v, params.beta_2)

    def is_finite(self) -> bool:
        return bool(
            np.all(np.isfinite(self._m))
            and np.all(np.isfinite(self._v))
            and np.all(np.isfinite(self._vector))
        )

    # Transiciones -------------------------------------------------------
    def reset_state(self) -> None:
        """Descarta la historia de momentos conservando el vector aprendido."""
        self._m = np.zeros_like(self._m)
        self._v = np.zeros_like(self._v)
        self._t = 0

    def update(self, gradient: ArrayLike, params: AdamParams) -> None:
        """
        Aplica un paso Adam con el gradiente sustituto dado.

        Lanza `ParamCountError` sin modificar el estado si la longitud del
        gradiente no coincide con la dimension.
        """
        grad = np.asarray(gradient, dtype=self._dtype).reshape(-1)
        if grad.shape[0] != self.vector_len():
            raise ParamCountError(self.vector_len(), grad.shape[0])

        self._t += 1
        self._m = params.beta_1 * self._m + (1.0 - params.beta_1) * grad
        self._v = params.beta_2 * self._v + (1.0 - params.beta_2) * np.square(grad)

        m_hat = self.m_hat(params)
        v_hat = self.v_hat(params)
        self._vector = self._vector - params.alpha * m_hat / (np.sqrt(v_hat) + params.epsilon)

    def _bias_corrected(self, moment: np.ndarray, beta: float) -> np.ndarray:
        if self._t == 0:
            raise StateNotStartedError(
                "Bias-corrected estimates are undefined before the first update (t == 0)."
            )
        return moment / (1.0 - beta ** self._t)

    # Persistencia -------------------------------------------------------
    def copy(self) -> "AdamState":
        return AdamState.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dtype": self._dtype.name,
            "t": self._t,
            "m": [float(x) for x in self._m],
            "v": [float(x) for x in self._v],
            "vector": [float(x) for x in self._vector],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AdamState":
        vector = payload["vector"]
        state = cls(len(vector), dtype=payload.get("dtype", "float64"))
        for name in ("m", "v"):
            if len(payload[name]) != len(vector):
                raise ParamCountError(len(vector), len(payload[name]))
        state._m = np.asarray(payload["m"], dtype=state._dtype)
        state._v = np.asarray(payload["v"], dtype=state._dtype)
        state._vector = np.asarray(vector, dtype=state._dtype)
        state._t = int(payload["t"])
        if state._t < 0:
            raise ValueError(f"Contador de pasos invalido: {state._t}")
        return state

    def __repr__(self) -> str:
        return f"AdamState(dim={self.vector_len()}, t={self._t}, dtype={self._dtype.name})"
