"""
Tests for the Seven Rules checks.

Validates:
    - Rule 5: zero-sum check with tolerance
    - Rules 1/3: one positive and one negative chunk
    - Rule 4: near-zero weights snapped to exactly 0
    - Rule 6: unit-scale detection and optional enforcement
    - Rule 7: k - 1 limit
    - Rule 2: singled-out levels found when reused
    - Pairwise orthogonality
"""

import numpy as np
import pytest

from pycontrasts.core.exceptions import (
    SignError,
    SumNotZeroError,
    TooManyContrastsError,
    UnitScaleError,
)
from pycontrasts.contrasts._rules import (
    check_contrast_count,
    find_chunk_reuse,
    find_non_orthogonal_pairs,
    normalize_contrast,
)

LEVELS = ('None', '2 Pints', '4 Pints')


def _normalize(weights, *, name='c', index=0, tol=1e-9, require_unit_scale=False):
    return normalize_contrast(
        np.asarray(weights, dtype=np.float64),
        LEVELS,
        index=index,
        name=name,
        tol=tol,
        require_unit_scale=require_unit_scale,
    )


# ═══════════════════════════════════════════════════════════════════════
# Rule 5: sum to zero
# ═══════════════════════════════════════════════════════════════════════


class TestSumToZero:

    def test_any_vs_none_passes(self):
        c = _normalize([-1, 0.5, 0.5])
        assert c.positive_sum == pytest.approx(1.0)

    def test_nonzero_sum_raises(self):
        with pytest.raises(SumNotZeroError) as exc_info:
            _normalize([1, 1, 1], name='bad', index=3)
        err = exc_info.value
        assert err.total == pytest.approx(3.0)
        assert err.contrast_index == 3
        assert err.contrast_name == 'bad'
        assert err.rule == 5

    def test_error_message_has_actual_sum(self):
        with pytest.raises(SumNotZeroError, match="sum to 0.5"):
            _normalize([-1, 1, 0.5])

    def test_tiny_float_error_tolerated(self):
        _normalize([-1, 1 / 3 + 1 / 3, 1 / 3])

    def test_sum_just_beyond_tolerance_raises(self):
        with pytest.raises(SumNotZeroError):
            _normalize([-1, 0.5, 0.5 + 1e-6])

    def test_custom_tolerance(self):
        c = _normalize([-1, 0.5, 0.5 + 1e-6], tol=1e-4)
        assert c.positive_levels == ('2 Pints', '4 Pints')


# ═══════════════════════════════════════════════════════════════════════
# Rules 1 and 3: two chunks of opposite sign
# ═══════════════════════════════════════════════════════════════════════


class TestSigns:

    def test_chunks_identified(self):
        c = _normalize([-1, 0.5, 0.5])
        assert c.negative_levels == ('None',)
        assert c.positive_levels == ('2 Pints', '4 Pints')
        assert c.zero_levels == ()

    def test_all_zero_raises(self):
        with pytest.raises(SignError) as exc_info:
            _normalize([0, 0, 0])
        assert exc_info.value.rule == 3

    def test_weights_within_tolerance_count_as_zero(self):
        with pytest.raises(SignError):
            _normalize([1e-12, -1e-12, 0])

    def test_message_counts_signs(self):
        with pytest.raises(SignError, match="0 positive and 0 negative"):
            _normalize([0, 0, 0])

    def test_sign_choice_doesnt_matter(self):
        c = _normalize([1, -0.5, -0.5])
        assert c.positive_levels == ('None',)
        assert c.negative_levels == ('2 Pints', '4 Pints')


# ═══════════════════════════════════════════════════════════════════════
# Rule 4: uninvolved levels are exactly zero
# ═══════════════════════════════════════════════════════════════════════


class TestZeroWeights:

    def test_zero_level_recorded(self):
        c = _normalize([0, -1, 1])
        assert c.zero_levels == ('None',)

    def test_near_zero_snapped(self):
        c = _normalize([-1, 1, 1e-12])
        assert c.weights[2] == 0.0
        assert c.zero_levels == ('4 Pints',)

    def test_weights_are_float64(self):
        c = _normalize([0, -1, 1])
        assert c.weights.dtype == np.float64


# ═══════════════════════════════════════════════════════════════════════
# Rule 6: unit scaling
# ═══════════════════════════════════════════════════════════════════════


class TestUnitScale:

    def test_unit_scaled(self):
        assert _normalize([-1, 0.5, 0.5]).is_unit_scaled

    def test_doubled_weights_not_unit_scaled(self):
        c = _normalize([-2, 1, 1])
        assert not c.is_unit_scaled
        assert c.positive_sum == pytest.approx(2.0)
        assert c.negative_sum == pytest.approx(-2.0)

    def test_doubled_weights_raise_when_required(self):
        with pytest.raises(UnitScaleError) as exc_info:
            _normalize([-2, 1, 1], require_unit_scale=True)
        err = exc_info.value
        assert err.rule == 6
        assert err.positive_sum == pytest.approx(2.0)
        assert err.negative_sum == pytest.approx(-2.0)

    def test_unit_scaled_passes_when_required(self):
        c = _normalize([0, -1, 1], require_unit_scale=True)
        assert c.is_unit_scaled


# ═══════════════════════════════════════════════════════════════════════
# Rule 7: at most k - 1
# ═══════════════════════════════════════════════════════════════════════


class TestContrastCount:

    def test_k_minus_1_ok(self):
        check_contrast_count(2, 3)

    def test_k_raises(self):
        with pytest.raises(TooManyContrastsError):
            check_contrast_count(3, 3)

    def test_attributes(self):
        with pytest.raises(TooManyContrastsError) as exc_info:
            check_contrast_count(4, 3)
        err = exc_info.value
        assert err.n_contrasts == 4
        assert err.max_contrasts == 2
        assert err.rule == 7


# ═══════════════════════════════════════════════════════════════════════
# Rule 2: chunk reuse
# ═══════════════════════════════════════════════════════════════════════


class TestChunkReuse:

    def test_proper_set_has_no_reuse(self):
        contrasts = (
            _normalize([-1, 0.5, 0.5], index=0),
            _normalize([0, -1, 1], index=1),
        )
        assert find_chunk_reuse(contrasts) == []

    def test_isolated_level_reused(self):
        contrasts = (
            _normalize([-1, 0.5, 0.5], index=0),
            _normalize([1, -1, 0], index=1),
        )
        assert find_chunk_reuse(contrasts) == [(1, 'None', 0)]

    def test_multi_level_chunk_can_be_subdivided(self):
        """2 Pints and 4 Pints formed one chunk; splitting it is allowed."""
        contrasts = (
            _normalize([-1, 0.5, 0.5], index=0),
            _normalize([0, 1, -1], index=1),
        )
        assert find_chunk_reuse(contrasts) == []

    def test_first_isolator_reported(self):
        contrasts = (
            _normalize([-1, 1, 0], index=0),
            _normalize([-1, 0, 1], index=1),
            _normalize([-1, 0.5, 0.5], index=2),
        )
        reuses = find_chunk_reuse(contrasts)
        assert (1, 'None', 0) in reuses
        assert (2, 'None', 0) in reuses
        assert (2, '2 Pints', 0) in reuses
        assert (2, '4 Pints', 1) in reuses


# ═══════════════════════════════════════════════════════════════════════
# Orthogonality
# ═══════════════════════════════════════════════════════════════════════


class TestOrthogonality:

    def test_orthogonal_pair(self):
        W = np.array([[-1, 0.5, 0.5], [0, -1, 1]])
        assert find_non_orthogonal_pairs(W, 1e-9) == []

    def test_non_orthogonal_pair(self):
        W = np.array([[-1, 1, 0], [-1, 0, 1]])
        assert find_non_orthogonal_pairs(W, 1e-9) == [(0, 1)]

    def test_single_contrast(self):
        W = np.array([[-1, 0.5, 0.5]])
        assert find_non_orthogonal_pairs(W, 1e-9) == []
