"""
Planned contrast solver dispatch.

Public API:
    validate_contrasts(levels, contrasts, ...) -> ValidationSolution
    build_from_inverse(levels, contrasts, ...) -> BasisSolution
    build_direct(levels, contrasts, ...) -> BasisSolution
    apply_to_means(contrast_set, group_means) -> EstimateSolution
"""

import time
import warnings
from typing import Any

import numpy as np

from pycontrasts.core.exceptions import (
    ChunkReuseError,
    ContrastWarning,
    ValidationError,
)
from pycontrasts.core.result import Result
from pycontrasts.core.tolerances import CONTRAST_FP64
from pycontrasts.contrasts._basis import bind_contrasts, invert_contrasts
from pycontrasts.contrasts._common import (
    BasisParams,
    ContrastEstimate,
    EstimateParams,
    ValidationParams,
)
from pycontrasts.contrasts._rules import (
    check_contrast_count,
    find_chunk_reuse,
    find_non_orthogonal_pairs,
    normalize_contrast,
)
from pycontrasts.contrasts.design import ContrastDesign, align_means
from pycontrasts.contrasts.solution import (
    BasisSolution,
    EstimateSolution,
    ValidationSolution,
)

_CHUNK_REUSE_MODES = ('warn', 'error', 'ignore')


def validate_contrasts(
    levels: Any,
    contrasts: Any,
    *,
    tol: float = CONTRAST_FP64.atol,
    require_unit_scale: bool = False,
    chunk_reuse: str = 'warn',
) -> ValidationSolution:
    """
    Check a set of planned contrasts against the Seven Rules.

    Args:
        levels: ordered level names (or a Factor); weights match by position
        contrasts: {name: weights}, list of weight vectors, list of
            ContrastSpec, or an (m, k) array
        tol: absolute tolerance for zero sums and zero weights
        require_unit_scale: also require chunk sums of +1 / -1 (Rule 6)
        chunk_reuse: what to do when a singled-out level is reused (Rule 2):
            'warn': emit ContrastWarning and record it (default)
            'error': raise ChunkReuseError
            'ignore': don't check

    Returns:
        ValidationSolution with normalized contrasts

    Raises:
        TooManyContrastsError: more than k - 1 contrasts
        SumNotZeroError: weights don't sum to zero
        SignError: no positive or no negative chunk
        UnitScaleError: chunk sums aren't +1 / -1 (only if required)
        ChunkReuseError: reused level (only with chunk_reuse='error')

    Examples:
        >>> result = validate_contrasts(
        ...     ['None', '2 Pints', '4 Pints'],
        ...     {'any_vs_none': [-1, 0.5, 0.5], 'pints4_vs_pints2': [0, -1, 1]},
        ... )
        >>> result.is_orthogonal
        True
    """
    t0 = time.perf_counter()

    if chunk_reuse not in _CHUNK_REUSE_MODES:
        raise ValueError(
            f"chunk_reuse must be one of {_CHUNK_REUSE_MODES}, got {chunk_reuse!r}"
        )
    if tol < 0:
        raise ValueError(f"tol must be non-negative, got {tol}")

    design = ContrastDesign.for_contrasts(levels, contrasts)
    params, messages = _validate_design(
        design,
        tol=tol,
        require_unit_scale=require_unit_scale,
        chunk_reuse=chunk_reuse,
    )

    elapsed = time.perf_counter() - t0

    result = Result(
        params=params,
        info={
            'k': design.k,
            'm': design.m,
            'tol': tol,
            'require_unit_scale': require_unit_scale,
            'chunk_reuse': chunk_reuse,
        },
        timing={'total_seconds': elapsed},
        backend_name='cpu',
        warnings=tuple(messages),
    )

    return ValidationSolution(_result=result)


def build_from_inverse(
    levels: Any,
    contrasts: Any,
    *,
    tol: float = CONTRAST_FP64.atol,
    validate: bool = True,
    require_unit_scale: bool = False,
    chunk_reuse: str = 'warn',
) -> BasisSolution:
    """
    Coding matrix that makes model coefficients equal the contrasts.

    Stacks a placeholder row of ones over the contrast rows, inverts the
    square result and drops the placeholder's column. With this coding
    attached to the factor, a linear model reports each contrast's
    estimate (e.g. a mean difference, under Rule 6) as its coefficient.

    Args:
        levels: ordered level names (or a Factor)
        contrasts: exactly k - 1 contrasts, in any form validate_contrasts accepts
        tol: absolute tolerance passed to validation
        validate: check the Seven Rules first (default True)
        require_unit_scale: see validate_contrasts
        chunk_reuse: see validate_contrasts

    Returns:
        BasisSolution with the (k, k-1) coding matrix

    Raises:
        SingularMatrixError: fewer than k - 1 contrasts, or contrasts that
            are linearly dependent
        Any validation error from validate_contrasts when validate=True

    Examples:
        >>> basis = build_from_inverse(
        ...     ['None', '2 Pints', '4 Pints'],
        ...     {'any_vs_none': [-1, 0.5, 0.5], 'pints4_vs_pints2': [0, -1, 1]},
        ... )
        >>> factor = factor.with_contrasts(basis)
    """
    t0 = time.perf_counter()

    design, weights, messages = _prepare_basis_input(
        levels, contrasts,
        tol=tol,
        validate=validate,
        require_unit_scale=require_unit_scale,
        chunk_reuse=chunk_reuse,
    )

    matrix, stacked, cond = invert_contrasts(weights)

    elapsed = time.perf_counter() - t0

    params = BasisParams(
        levels=design.levels,
        names=design.names,
        weights=weights,
        matrix=matrix,
        method='inverse',
        stacked=stacked,
        condition_number=cond,
    )

    result = Result(
        params=params,
        info={'method': 'inverse', 'k': design.k, 'm': design.m, 'validated': validate},
        timing={'total_seconds': elapsed},
        backend_name='cpu',
        warnings=tuple(messages),
    )

    return BasisSolution(_result=result)


def build_direct(
    levels: Any,
    contrasts: Any,
    *,
    tol: float = CONTRAST_FP64.atol,
    validate: bool = True,
    require_unit_scale: bool = False,
    chunk_reuse: str = 'warn',
) -> BasisSolution:
    """
    Use the contrasts themselves as the coding columns.

    The t-statistics are the same as with build_from_inverse(), but each
    coefficient equals the contrast estimate divided by the squared norm
    of its weights (for orthogonal contrasts), not the estimate itself.
    Fewer than k - 1 contrasts are allowed.

    Args:
        levels: ordered level names (or a Factor)
        contrasts: 1 to k - 1 contrasts
        tol, validate, require_unit_scale, chunk_reuse: see build_from_inverse

    Returns:
        BasisSolution with the (k, m) coding matrix
    """
    t0 = time.perf_counter()

    design, weights, messages = _prepare_basis_input(
        levels, contrasts,
        tol=tol,
        validate=validate,
        require_unit_scale=require_unit_scale,
        chunk_reuse=chunk_reuse,
    )

    matrix = bind_contrasts(weights)

    elapsed = time.perf_counter() - t0

    params = BasisParams(
        levels=design.levels,
        names=design.names,
        weights=weights,
        matrix=matrix,
        method='direct',
        stacked=None,
        condition_number=None,
    )

    result = Result(
        params=params,
        info={'method': 'direct', 'k': design.k, 'm': design.m, 'validated': validate},
        timing={'total_seconds': elapsed},
        backend_name='cpu',
        warnings=tuple(messages),
    )

    return BasisSolution(_result=result)


def apply_to_means(
    contrast_set: ValidationSolution | BasisSolution,
    group_means: Any,
) -> EstimateSolution:
    """
    Apply each contrast to the group (estimated marginal) means.

    Each estimate is the dot product of the contrast's weights with the
    means in level order. Under Rule 6 this is a difference of chunk means.

    Args:
        contrast_set: result of validate_contrasts(), build_from_inverse()
            or build_direct()
        group_means: {level: mean} covering exactly the set's levels, or a
            sequence of means in level order

    Returns:
        EstimateSolution; .estimates is a tuple of (label, estimate)

    Examples:
        >>> contrasts = validate_contrasts(levels, {'any_vs_none': [-1, 0.5, 0.5]})
        >>> apply_to_means(contrasts, {'None': 60.0, '2 Pints': 62.0, '4 Pints': 40.0})
    """
    t0 = time.perf_counter()

    if not isinstance(contrast_set, (ValidationSolution, BasisSolution)):
        raise ValidationError(
            "contrast_set: expected the result of validate_contrasts(), "
            f"build_from_inverse() or build_direct(), got {type(contrast_set).__name__}"
        )

    levels = contrast_set.levels
    means = align_means(group_means, levels)
    weights = contrast_set.weights

    values = weights @ means
    estimates = tuple(
        ContrastEstimate(label=name, estimate=float(v))
        for name, v in zip(contrast_set.names, values)
    )

    elapsed = time.perf_counter() - t0

    params = EstimateParams(
        levels=levels,
        group_means=tuple(float(v) for v in means),
        estimates=estimates,
    )

    result = Result(
        params=params,
        info={'k': len(levels), 'm': len(estimates)},
        timing={'total_seconds': elapsed},
        backend_name='cpu',
    )

    return EstimateSolution(_result=result)


# =====================================================================
# Internal helpers
# =====================================================================


def _validate_design(
    design: ContrastDesign,
    *,
    tol: float,
    require_unit_scale: bool,
    chunk_reuse: str,
    stacklevel: int = 3,
) -> tuple[ValidationParams, list[str]]:
    """Run the Seven Rules over a design. Returns params and advisory messages."""
    check_contrast_count(design.m, design.k)

    normalized = tuple(
        normalize_contrast(
            design.weights[i],
            design.levels,
            index=i,
            name=design.names[i],
            tol=tol,
            require_unit_scale=require_unit_scale,
        )
        for i in range(design.m)
    )

    messages: list[str] = []
    reused: list[tuple[int, str]] = []
    if chunk_reuse != 'ignore':
        for index, level, isolated_by in find_chunk_reuse(normalized):
            name = normalized[index].name
            message = (
                f"contrast {index} ({name!r}) reuses level {level!r}, already "
                f"singled out by contrast {isolated_by} "
                f"({normalized[isolated_by].name!r})"
            )
            if chunk_reuse == 'error':
                raise ChunkReuseError(
                    message,
                    contrast_index=index,
                    contrast_name=name,
                    level=level,
                    isolated_by=isolated_by,
                )
            warnings.warn(message, ContrastWarning, stacklevel=stacklevel)
            messages.append(message)
            reused.append((index, level))

    pairs = find_non_orthogonal_pairs(
        np.vstack([c.weights for c in normalized]), tol,
    )

    params = ValidationParams(
        levels=design.levels,
        contrasts=normalized,
        max_contrasts=design.k - 1,
        is_orthogonal=not pairs,
        non_orthogonal_pairs=tuple(pairs),
        reused_levels=tuple(reused),
    )
    return params, messages


def _prepare_basis_input(
    levels: Any,
    contrasts: Any,
    *,
    tol: float,
    validate: bool,
    require_unit_scale: bool,
    chunk_reuse: str,
) -> tuple[ContrastDesign, np.ndarray, list[str]]:
    """Design, the weights to build from, and any advisory messages."""
    if chunk_reuse not in _CHUNK_REUSE_MODES:
        raise ValueError(
            f"chunk_reuse must be one of {_CHUNK_REUSE_MODES}, got {chunk_reuse!r}"
        )

    design = ContrastDesign.for_contrasts(levels, contrasts)
    if not validate:
        return design, design.weights, []

    params, messages = _validate_design(
        design,
        tol=tol,
        require_unit_scale=require_unit_scale,
        chunk_reuse=chunk_reuse,
        stacklevel=4,
    )
    weights = np.vstack([c.weights for c in params.contrasts])
    return design, weights, messages
