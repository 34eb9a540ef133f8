"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def default_config():
    """The stock 1300-star configuration."""
    from starfield.core import StarfieldConfig
    return StarfieldConfig()


@pytest.fixture
def small_config():
    """A small population for fast tests."""
    from starfield.core import StarfieldConfig
    return StarfieldConfig(
        num_stars=200,
        space_extent=1000.0,
        min_speed=10.0,
        max_speed=80.0,
        acceleration_multiplier=1.0,
    )


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
