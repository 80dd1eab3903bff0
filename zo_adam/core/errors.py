"""
Jerarquia de excepciones del optimizador.

Se distinguen los errores recuperables (dimension incorrecta) de las
violaciones de contrato del llamador, que se consideran fatales.
"""

from __future__ import annotations


class ZoAdamError(Exception):
    """Base comun para todos los errores del paquete."""


class ParamCountError(ZoAdamError, ValueError):
    """La longitud de un gradiente o vector no coincide con la dimension del estado."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"Parameter count is unequal: expected {expected}, got {got}")
        self.expected = expected
        self.got = got


class PopulationContractError(ZoAdamError, RuntimeError):
    """Poblacion y puntajes no respetan el contrato del llamador."""


class StateNotStartedError(ZoAdamError, RuntimeError):
    """Se pidio una estimacion corregida por sesgo con t == 0."""


class NumericCollapseError(ZoAdamError, ArithmeticError):
    """El vector optimizado dejo de ser finito."""
