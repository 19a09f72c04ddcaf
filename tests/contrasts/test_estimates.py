"""
Tests for apply_to_means().

Validates:
    - Estimates are weight . means in level order
    - Mapping and sequence inputs for the means
    - Rule 6 scaling changes estimates proportionally
    - Mismatched levels and bad inputs are rejected
"""

import numpy as np
import pytest

from pycontrasts import apply_to_means, build_from_inverse, validate_contrasts
from pycontrasts.core.exceptions import DimensionError, ValidationError


class TestApplyToMeans:

    def test_alcohol_estimates(self, alcohol_levels, alcohol_contrasts, alcohol_means):
        contrasts = validate_contrasts(alcohol_levels, alcohol_contrasts)
        result = apply_to_means(contrasts, alcohol_means)
        assert result.estimates == (('any_vs_none', -9.0), ('pints4_vs_pints2', -22.0))

    def test_ordered_like_contrasts(self, alcohol_levels, alcohol_means):
        contrasts = validate_contrasts(
            alcohol_levels, {'second': [0, -1, 1], 'first': [-1, 0.5, 0.5]},
        )
        result = apply_to_means(contrasts, alcohol_means)
        assert result.labels == ('second', 'first')

    def test_mapping_order_irrelevant(self, alcohol_levels, alcohol_contrasts):
        contrasts = validate_contrasts(alcohol_levels, alcohol_contrasts)
        shuffled = {'4 Pints': 40.0, 'None': 60.0, '2 Pints': 62.0}
        result = apply_to_means(contrasts, shuffled)
        np.testing.assert_allclose(result.values, [-9.0, -22.0])

    def test_sequence_in_level_order(self, alcohol_levels, alcohol_contrasts):
        contrasts = validate_contrasts(alcohol_levels, alcohol_contrasts)
        result = apply_to_means(contrasts, [60.0, 62.0, 40.0])
        np.testing.assert_allclose(result.values, [-9.0, -22.0])

    def test_doubled_weights_double_estimate(self, alcohol_levels, alcohol_means):
        unit = apply_to_means(
            validate_contrasts(alcohol_levels, {'c': [-1, 0.5, 0.5]}), alcohol_means,
        )
        doubled = apply_to_means(
            validate_contrasts(alcohol_levels, {'c': [-2, 1, 1]}), alcohol_means,
        )
        assert doubled['c'] == pytest.approx(2 * unit['c'])

    def test_from_basis(self, alcohol_levels, alcohol_contrasts, alcohol_means):
        basis = build_from_inverse(alcohol_levels, alcohol_contrasts)
        result = apply_to_means(basis, alcohol_means)
        assert result.as_dict() == {'any_vs_none': -9.0, 'pints4_vs_pints2': -22.0}

    def test_group_means_kept(self, alcohol_levels, alcohol_contrasts, alcohol_means):
        contrasts = validate_contrasts(alcohol_levels, alcohol_contrasts)
        result = apply_to_means(contrasts, alcohol_means)
        assert result.group_means == alcohol_means

    def test_equal_means_give_zero(self, alcohol_levels, alcohol_contrasts):
        contrasts = validate_contrasts(alcohol_levels, alcohol_contrasts)
        result = apply_to_means(contrasts, [5.0, 5.0, 5.0])
        np.testing.assert_allclose(result.values, 0.0, atol=1e-12)


class TestApplyToMeansErrors:

    def test_missing_level(self, alcohol_levels, alcohol_contrasts):
        contrasts = validate_contrasts(alcohol_levels, alcohol_contrasts)
        with pytest.raises(ValidationError, match="missing \\['4 Pints'\\]"):
            apply_to_means(contrasts, {'None': 60.0, '2 Pints': 62.0})

    def test_unexpected_level(self, alcohol_levels, alcohol_contrasts, alcohol_means):
        contrasts = validate_contrasts(alcohol_levels, alcohol_contrasts)
        means = dict(alcohol_means, **{'6 Pints': 30.0})
        with pytest.raises(ValidationError, match="unexpected \\['6 Pints'\\]"):
            apply_to_means(contrasts, means)

    def test_wrong_length_sequence(self, alcohol_levels, alcohol_contrasts):
        contrasts = validate_contrasts(alcohol_levels, alcohol_contrasts)
        with pytest.raises(DimensionError, match="expected 3 means"):
            apply_to_means(contrasts, [60.0, 62.0])

    def test_non_finite_mean(self, alcohol_levels, alcohol_contrasts):
        contrasts = validate_contrasts(alcohol_levels, alcohol_contrasts)
        with pytest.raises(ValidationError, match="non-finite"):
            apply_to_means(contrasts, [60.0, np.inf, 40.0])

    def test_raw_weights_rejected(self, alcohol_levels, alcohol_contrasts, alcohol_means):
        with pytest.raises(ValidationError, match="contrast_set"):
            apply_to_means(alcohol_contrasts, alcohol_means)


class TestEstimateSolution:

    def test_getitem_unknown(self, alcohol_levels, alcohol_contrasts, alcohol_means):
        result = apply_to_means(
            validate_contrasts(alcohol_levels, alcohol_contrasts), alcohol_means,
        )
        with pytest.raises(KeyError):
            result['nope']

    def test_summary(self, alcohol_levels, alcohol_contrasts, alcohol_means):
        result = apply_to_means(
            validate_contrasts(alcohol_levels, alcohol_contrasts), alcohol_means,
        )
        text = result.summary()
        assert "Contrast Estimates" in text
        assert "-22.000000" in text

    def test_info(self, alcohol_levels, alcohol_contrasts, alcohol_means):
        result = apply_to_means(
            validate_contrasts(alcohol_levels, alcohol_contrasts), alcohol_means,
        )
        assert result.info == {'k': 3, 'm': 2}
