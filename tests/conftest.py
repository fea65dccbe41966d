# tests/conftest.py
import numpy as np
import pytest

import gridtrace as gt
from gridtrace.utils.config import reset_config


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts and ends with default package settings."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(params=["cpu", "serial"])
def architecture(request):
    """Run a test on both the threaded and the serial architecture."""
    arch = gt.CPU(max_workers=4) if request.param == "cpu" else gt.SerialCPU()
    yield arch
    arch.shutdown()


@pytest.fixture
def unit_bounded_grid():
    return gt.RegularCartesianGrid(size=(4, 4, 4), topology=(gt.Bounded, gt.Bounded, gt.Bounded))


@pytest.fixture
def linear_function():
    def f(x, y, z):
        return 2.0 * x + 3.0 * y - z + 1.0
    return f


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
