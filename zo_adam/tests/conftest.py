from __future__ import annotations

import numpy as np
import pytest

from zo_adam.logic.params import AdamParams


@pytest.fixture
def params() -> AdamParams:
    return AdamParams()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
