"""
Optimizador de orden cero: gradiente sustituto estimado a partir de una
poblacion puntuada y aplicado con la regla de momentos Adam.

Capas:
  - nucleo compartido (`core`): configuracion, errores y telemetria;
  - logica (`logic`): parametros, estado, driver y controlador;
  - objetivos de referencia (`objectives`);
  - presentacion (`presentation`): graficas del progreso.
"""

from .core.config import Config, make_rng  # noqa: F401
from .core.errors import (  # noqa: F401
    NumericCollapseError,
    ParamCountError,
    PopulationContractError,
    StateNotStartedError,
    ZoAdamError,
)
from .core.telemetry import setup_logger  # noqa: F401
from .logic.driver import AdamDriver, GenerationReport  # noqa: F401
from .logic.params import AdamParams  # noqa: F401
from .logic.state import AdamState  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "AdamParams",
    "AdamState",
    "AdamDriver",
    "GenerationReport",
    "Config",
    "make_rng",
    "setup_logger",
    "ZoAdamError",
    "ParamCountError",
    "PopulationContractError",
    "StateNotStartedError",
    "NumericCollapseError",
]
