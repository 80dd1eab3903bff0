from __future__ import annotations

import numpy as np
import pytest

from zo_adam.objectives import BENCHMARKS, get_objective


@pytest.mark.parametrize("name", sorted(BENCHMARKS))
def test_optimum_scores_zero(name: str) -> None:
    optimum = np.ones(3) if name == "rosenbrock" else np.zeros(3)
    assert get_objective(name)(optimum) == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("name", sorted(BENCHMARKS))
def test_scores_are_higher_is_better(name: str) -> None:
    objective = get_objective(name)
    optimum = np.ones(3) if name == "rosenbrock" else np.zeros(3)
    assert objective(optimum + 0.3) < objective(optimum)


def test_shift_moves_optimum() -> None:
    objective = get_objective("sphere", shift=2.0)
    assert objective(np.full(4, 2.0)) == 0.0
    assert objective(np.zeros(4)) == -16.0


def test_unknown_objective() -> None:
    with pytest.raises(ValueError):
        get_objective("himmelblau")
