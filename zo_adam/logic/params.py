"""
Hiperparametros de la regla de actualizacion Adam.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class AdamParams:
    alpha: float = 0.001
    epsilon: float = 1e-8
    beta_1: float = 0.9
    beta_2: float = 0.999

    def __post_init__(self) -> None:
        if not self.alpha > 0.0:
            raise ValueError(f"Invalid step size alpha: {self.alpha}")
        if not self.epsilon > 0.0:
            raise ValueError(f"Invalid epsilon value: {self.epsilon}")
        if not 0.0 <= self.beta_1 < 1.0:
            raise ValueError(f"Invalid beta_1 parameter: {self.beta_1}")
        if not 0.0 <= self.beta_2 < 1.0:
            raise ValueError(f"Invalid beta_2 parameter: {self.beta_2}")

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AdamParams":
        return cls(
            alpha=float(payload["alpha"]),
            epsilon=float(payload["epsilon"]),
            beta_1=float(payload["beta_1"]),
            beta_2=float(payload["beta_2"]),
        )
