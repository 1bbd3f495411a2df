"""
Test configuration and fixtures.
"""

import pytest
import numpy as np

import LpReg.backend.backend as backend


class FakeTensor:
    """Minimal tensor wrapper exposing its storage as `.data`."""
    def __init__(self, data):
        self.data = data


@pytest.fixture(autouse=True)
def restore_dtype():
    """Keep dtype changes made by a test from leaking into the next one."""
    prev = backend.DTYPE
    yield
    backend.DTYPE = prev


@pytest.fixture
def weight():
    """A small weight matrix with positive, negative and zero entries."""
    return np.array([[1.5, -2.0, 0.0],
                     [0.25, -0.5, 3.0]], dtype=np.float64)


@pytest.fixture
def random_weight():
    rng = np.random.default_rng(0)
    return rng.standard_normal((4, 5))


@pytest.fixture
def fake_tensor():
    return FakeTensor
