"""
Shared fixtures for contrast tests.

Provides the Alcohol / self-control dataset used for the planned
contrast scenarios, plus a four-level factor for chunk-reuse cases.
"""

import numpy as np
import pytest


@pytest.fixture
def alcohol_means():
    """Group means with easy contrast values: -9 and -22, grand mean 54."""
    return {'None': 60.0, '2 Pints': 62.0, '4 Pints': 40.0}


@pytest.fixture
def alcohol_data():
    """3-group balanced design (n=16 each), 4 Pints clearly lower."""
    rng = np.random.default_rng(42)
    n_per_group = 16
    y = np.concatenate([
        rng.normal(63.75, 8.0, n_per_group),
        rng.normal(64.69, 8.0, n_per_group),
        rng.normal(46.56, 8.0, n_per_group),
    ])
    labels = np.array(
        ['None'] * n_per_group + ['2 Pints'] * n_per_group + ['4 Pints'] * n_per_group
    )
    return y, labels


@pytest.fixture
def four_levels():
    return ['A', 'B', 'C', 'D']


@pytest.fixture
def nested_contrasts():
    """Complete, orthogonal, rule-abiding set for four levels."""
    return {
        'a_vs_rest': [-1, 1 / 3, 1 / 3, 1 / 3],
        'b_vs_cd': [0, -1, 0.5, 0.5],
        'c_vs_d': [0, 0, -1, 1],
    }
