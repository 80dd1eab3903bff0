"""
Capa logica: estado Adam, driver de poblacion, gradiente sustituto y
orquestacion continua.
"""

from .controller import OptimizationController  # noqa: F401
from .driver import AdamDriver, GenerationReport  # noqa: F401
from .fitness import FitnessEvaluator  # noqa: F401
from .gradient import GradientEstimate, generate_gradient_at_point  # noqa: F401
from .params import AdamParams  # noqa: F401
from .restart import RestartPolicy  # noqa: F401
from .state import AdamState  # noqa: F401

__all__ = [
    "AdamParams",
    "AdamState",
    "AdamDriver",
    "GenerationReport",
    "GradientEstimate",
    "generate_gradient_at_point",
    "FitnessEvaluator",
    "RestartPolicy",
    "OptimizationController",
]
