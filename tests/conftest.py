"""
Shared pytest fixtures for the test suite.

The spatial dimension is process-wide on PointState, so it is released
before every test to let each test pick its own.
"""

import pytest
import numpy as np

from flowvars.config import PhysicalConstants, nondimensional_preset
from flowvars.variables import PointState
from flowvars.utils.logging import disable_logging


disable_logging()


@pytest.fixture(autouse=True)
def reset_dimension():
    """Release the bound spatial dimension around each test."""
    PointState.reset_dimension()
    yield
    PointState.reset_dimension()


@pytest.fixture
def air():
    """Dimensional air constants (SI)."""
    return PhysicalConstants()


@pytest.fixture
def nondim():
    """Reference-scaled gas constants (gamma = 1.4, R = 1/gamma)."""
    return nondimensional_preset()


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)
