from __future__ import annotations

import math

import numpy as np

from zo_adam.logic.fitness import FitnessEvaluator
from zo_adam.objectives import get_objective


class _CountingObjective:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, x: np.ndarray) -> float:
        self.calls += 1
        return -float(np.sum(x ** 2))


def test_scores_keep_population_order() -> None:
    evaluator = FitnessEvaluator(get_objective("sphere"))
    X = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]])
    assert evaluator.evaluate_batch(X) == [0.0, -1.0, -2.0]


def test_each_candidate_calls_objective_once() -> None:
    objective = _CountingObjective()
    evaluator = FitnessEvaluator(objective)
    X = np.array([[0.5, 0.5], [1.0, 2.0]])

    first = evaluator.evaluate_batch(X)
    second = evaluator.evaluate_batch(X)

    assert first == second
    assert objective.calls == 4
    assert evaluator.objective_calls == 4
    assert evaluator.failures == 0


def test_failures_score_negative_infinity() -> None:
    def flaky(x: np.ndarray) -> float:
        if x[0] < 0:
            raise RuntimeError("simulation diverged")
        if x[0] == 0:
            return float("nan")
        return 1.0

    evaluator = FitnessEvaluator(flaky)
    scores, details = evaluator.evaluate_batch(
        np.array([[-1.0], [0.0], [2.0]]), return_details=True
    )
    assert scores[0] == -math.inf
    assert scores[1] == -math.inf
    assert scores[2] == 1.0
    assert [d["status"] for d in details] == ["error", "nan", "ok"]
    assert evaluator.failures == 2


def test_threaded_evaluation_matches_serial() -> None:
    X = np.random.default_rng(3).normal(size=(12, 4))
    objective = get_objective("rastrigin")
    serial = FitnessEvaluator(objective, n_jobs=1).evaluate_batch(X)
    threaded = FitnessEvaluator(objective, n_jobs=2).evaluate_batch(X)
    assert serial == threaded


def test_empty_batch() -> None:
    evaluator = FitnessEvaluator(get_objective("sphere"))
    assert evaluator.evaluate_batch(np.empty((0, 2))) == []
