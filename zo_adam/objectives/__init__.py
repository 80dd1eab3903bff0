"""
Objetivos de referencia para demostraciones y pruebas del optimizador.
"""

from .benchmarks import BENCHMARKS, get_objective  # noqa: F401

__all__ = ["BENCHMARKS", "get_objective"]
