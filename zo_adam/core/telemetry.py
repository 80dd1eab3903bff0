"""
Herramientas de registro y telemetria compartidas por todos los modulos.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config


def setup_logger(level: str = "INFO") -> logging.Logger:
    """Configura un logger estandar reutilizable en toda la aplicacion."""
    logger = logging.getLogger("zo_adam")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    fmt = "[%(asctime)s] %(levelname)s - %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    return logger


class MetricsLogger:
    """Registro ligero de metricas por generacion."""

    def __init__(self) -> None:
        self.start_time = time.time()
        self.phases: Dict[str, float] = {}
        self.eval_count = 0
        self.objective_calls = 0
        self.generations = 0
        self.restarts = 0
        self.degenerate_generations = 0
        self.best_score_per_generation: List[float] = []
        self.generation_history: List[Dict[str, Any]] = []
        self.evaluation_failures = 0

    def mark_phase(self, name: str) -> None:
        self.phases[name] = time.time() - self.start_time

    def record_generation(self, payload: Dict[str, Any]) -> None:
        self.generation_history.append(payload)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wall_time_s": max(time.time() - self.start_time, 1e-9),
            "phases": self.phases,
            "eval_count": self.eval_count,
            "objective_calls": self.objective_calls,
            "generations": self.generations,
            "restarts": self.restarts,
            "degenerate_generations": self.degenerate_generations,
            "evaluation_failures": self.evaluation_failures,
            "best_score_per_generation": self.best_score_per_generation,
            "generation_history": self.generation_history,
        }


class Reporter:
    """Gestiona archivos de salida en la carpeta de artefactos."""

    def __init__(self, artifacts_dir: str, logger: Optional[logging.Logger] = None) -> None:
        self.dir = Path(artifacts_dir)
        self.dir.mkdir(parents=True, exist_ok=True)
        self.logger = logger or logging.getLogger("zo_adam")

    def save_json(self, name: str, payload: Dict[str, Any]) -> Path:
        path = self.dir / name
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, allow_nan=True)
        return path

    def save_config(self, cfg: Config) -> Path:
        return self.save_json("config.json", asdict(cfg))

    def save_metrics(self, metrics: MetricsLogger) -> Path:
        return self.save_json("metrics.json", metrics.to_dict())

    def save_results(self, results: Dict[str, Any]) -> Path:
        return self.save_json("results.json", results)

    def checkpoint(self, generation: int, payload: Dict[str, Any]) -> Path:
        path = self.save_json(f"checkpoint_gen_{generation:04d}.json", payload)
        self.logger.debug("Checkpoint written to %s", path)
        return path

    def latest_checkpoint(self) -> Optional[Path]:
        files = sorted(self.dir.glob("checkpoint_gen_*.json"))
        return files[-1] if files else None

    @staticmethod
    def load_json(path: str | Path) -> Dict[str, Any]:
        with Path(path).open("r", encoding="utf-8") as f:
            return json.load(f)

    def bootstrap(self, cfg: Config) -> None:
        self.save_config(cfg)
        self.logger.info("Saved config.json to %s", self.dir)
