"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def alcohol_levels():
    """Levels of the Alcohol factor, in the order contrasts refer to."""
    return ['None', '2 Pints', '4 Pints']


@pytest.fixture
def alcohol_contrasts():
    """Two orthogonal, unit-scaled planned contrasts for the Alcohol factor."""
    return {
        'any_vs_none': [-1, 0.5, 0.5],
        'pints4_vs_pints2': [0, -1, 1],
    }
