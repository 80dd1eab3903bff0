"""
Componentes compartidos por todas las capas: configuracion, errores y
telemetria.
"""

from .config import Config, make_rng, resolve_dtype  # noqa: F401
from .errors import (  # noqa: F401
    NumericCollapseError,
    ParamCountError,
    PopulationContractError,
    StateNotStartedError,
    ZoAdamError,
)
from .telemetry import MetricsLogger, Reporter, setup_logger  # noqa: F401

__all__ = [
    "Config",
    "make_rng",
    "resolve_dtype",
    "MetricsLogger",
    "Reporter",
    "setup_logger",
    "ZoAdamError",
    "ParamCountError",
    "PopulationContractError",
    "StateNotStartedError",
    "NumericCollapseError",
]
