"""
Tests for ContrastDesign.

Validates:
    - Names and weights extracted from each accepted input shape
    - Weight matrix shape and dtype
    - Duplicate names rejected
"""

import numpy as np
import pytest

from pycontrasts import ContrastSpec, Factor
from pycontrasts.core.exceptions import ValidationError
from pycontrasts.contrasts.design import ContrastDesign, resolve_levels


class TestForContrasts:

    def test_dict(self, alcohol_levels, alcohol_contrasts):
        d = ContrastDesign.for_contrasts(alcohol_levels, alcohol_contrasts)
        assert d.names == ('any_vs_none', 'pints4_vs_pints2')
        assert d.weights.shape == (2, 3)
        assert d.weights.dtype == np.float64
        assert d.k == 3
        assert d.m == 2

    def test_single_spec(self, alcohol_levels):
        d = ContrastDesign.for_contrasts(
            alcohol_levels, ContrastSpec('c', (0.0, -1.0, 1.0)),
        )
        assert d.names == ('c',)

    def test_1d_array(self, alcohol_levels):
        d = ContrastDesign.for_contrasts(alcohol_levels, np.array([-1, 0.5, 0.5]))
        assert d.weights.shape == (1, 3)

    def test_mixed_specs_and_vectors(self, alcohol_levels):
        d = ContrastDesign.for_contrasts(
            alcohol_levels, [ContrastSpec('first', (-1, 0.5, 0.5)), [0, -1, 1]],
        )
        assert d.names == ('first', 'c2')

    def test_duplicate_names_raise(self, alcohol_levels):
        specs = [ContrastSpec('c', (-1, 0.5, 0.5)), ContrastSpec('c', (0, -1, 1))]
        with pytest.raises(ValidationError, match="names must be unique"):
            ContrastDesign.for_contrasts(alcohol_levels, specs)

    def test_non_iterable_raises(self, alcohol_levels):
        with pytest.raises(ValidationError):
            ContrastDesign.for_contrasts(alcohol_levels, 3.0)

    def test_string_weights_raise(self, alcohol_levels):
        with pytest.raises(ValidationError, match="non-numeric"):
            ContrastDesign.for_contrasts(alcohol_levels, {'c': ['a', 'b', 'c']})


class TestResolveLevels:

    def test_sequence(self):
        assert resolve_levels(['x', 'y']) == ('x', 'y')

    def test_factor(self):
        f = Factor(name='g', levels=('b', 'a'), reference='a')
        assert resolve_levels(f) == ('b', 'a')

    def test_numeric_levels_become_strings(self):
        assert resolve_levels(np.array([1, 2, 3])) == ('1', '2', '3')
