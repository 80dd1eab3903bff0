"""
Capa de presentacion: visualizacion Matplotlib del progreso.
"""

from .visualization import ProgressPlotter  # noqa: F401

__all__ = ["ProgressPlotter"]
