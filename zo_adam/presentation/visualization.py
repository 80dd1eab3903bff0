"""
Modulo de visualizacion con Matplotlib del historial de optimizacion.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np


class ProgressPlotter:
    def __init__(self, headless: bool = True) -> None:
        self.headless = headless

    def plot_history(
        self,
        metrics: Dict[str, Any],
        path: Optional[str | Path] = None,
        title: str = "Progreso de la optimizacion",
    ):
        """
        Grafica el mejor puntaje global y la norma del gradiente por generacion.

        `metrics` es el diccionario de `MetricsLogger.to_dict()`.
        """
        import matplotlib

        if self.headless:
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        history = metrics.get("generation_history", [])
        best = np.asarray(metrics.get("best_score_per_generation", []), dtype=float)
        grad_norm = np.asarray([h.get("gradient_norm", np.nan) for h in history], dtype=float)
        restarts = [h["generation"] for h in history if h.get("bootstrap") and h["generation"] > 0]

        fig, (ax_score, ax_grad) = plt.subplots(1, 2, figsize=(12, 4.5))
        ax_score.set_title("Mejor puntaje global")
        ax_score.set_xlabel("Generacion")
        ax_score.set_ylabel("Puntaje")
        ax_score.grid(True, alpha=0.3)
        ax_grad.set_title("Norma del gradiente sustituto")
        ax_grad.set_xlabel("Generacion")
        ax_grad.set_ylabel("|g|")
        ax_grad.grid(True, alpha=0.3)

        if best.size:
            ax_score.plot(np.arange(best.size), best, color="tab:blue")
        else:
            ax_score.text(0.5, 0.5, "Sin datos", ha="center", va="center", transform=ax_score.transAxes)
        finite = np.isfinite(grad_norm) & (grad_norm > 0)
        if np.any(finite):
            gens = np.arange(grad_norm.size)
            ax_grad.semilogy(gens[finite], grad_norm[finite], color="tab:orange")
        for gen in restarts:
            ax_score.axvline(gen, color="tab:red", alpha=0.3, linestyle="--")

        fig.suptitle(title)
        fig.tight_layout()
        if path is not None:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(path, dpi=120)
        if self.headless:
            plt.close(fig)
        else:
            plt.show()
        return fig
