from __future__ import annotations

import numpy as np
import pytest

from zo_adam.core.errors import ParamCountError, PopulationContractError
from zo_adam.logic.gradient import generate_gradient_at_point


def test_recovers_exact_linear_slope() -> None:
    est = generate_gradient_at_point([0.0], 0.0, [[-1.0], [1.0]], [-3.0, 3.0])
    assert est.gradient.tolist() == [3.0]
    assert est.sample_count == 2
    assert est.degenerate_axes == []


def test_dimensions_are_independent_regressions() -> None:
    center = np.array([0.0, 0.0])
    vectors = np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 2.0], [0.0, -2.0]])
    scores = 2.0 * vectors[:, 0] - 0.5 * vectors[:, 1]
    est = generate_gradient_at_point(center, 0.0, vectors, scores)
    assert est.gradient.tolist() == [2.0, -0.5]


def test_offsets_are_relative_to_center() -> None:
    center = np.array([10.0])
    vectors = np.array([[9.0], [11.0], [12.0]])
    scores = 4.0 * (vectors[:, 0] - 10.0) + 7.0
    est = generate_gradient_at_point(center, 7.0, vectors, scores)
    assert est.gradient[0] == pytest.approx(4.0)


def test_degenerate_axis_guarded_as_zero() -> None:
    center = np.array([1.0, 2.0])
    vectors = np.array([[1.5, 2.0], [0.5, 2.0]])
    est = generate_gradient_at_point(center, 0.0, vectors, [1.0, -1.0])
    assert est.gradient.tolist() == [2.0, 0.0]
    assert est.degenerate_axes == [1]
    assert est.is_finite


def test_degenerate_axis_unguarded_is_non_finite() -> None:
    center = np.array([1.0, 2.0])
    vectors = np.array([[1.5, 2.0], [0.5, 2.0]])
    est = generate_gradient_at_point(center, 0.0, vectors, [1.0, -1.0], guard_degenerate=False)
    assert est.gradient[0] == 2.0
    assert np.isnan(est.gradient[1])
    assert not est.is_finite


def test_no_neighbours_is_fully_degenerate() -> None:
    est = generate_gradient_at_point([0.0, 0.0, 0.0], 1.0, np.empty((0, 3)), [])
    assert est.gradient.tolist() == [0.0, 0.0, 0.0]
    assert est.degenerate_axes == [0, 1, 2]
    assert est.norm == 0.0


def test_score_count_mismatch() -> None:
    with pytest.raises(PopulationContractError):
        generate_gradient_at_point([0.0], 0.0, [[1.0], [2.0]], [1.0])


def test_vector_dimension_mismatch() -> None:
    with pytest.raises(ParamCountError):
        generate_gradient_at_point([0.0, 0.0], 0.0, [[1.0, 2.0, 3.0]], [1.0])


def test_follows_center_precision() -> None:
    center = np.zeros(2, dtype=np.float32)
    est = generate_gradient_at_point(center, 0.0, [[1.0, 1.0], [-1.0, 2.0]], [1.0, 0.5])
    assert est.gradient.dtype == np.float32
