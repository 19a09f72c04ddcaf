"""
Standard contrast codings and model matrix rows for a single factor.

A coding is a (k, c) matrix: one row per level in the factor's level
order, one column per model-matrix column the factor contributes.
Planned contrasts built by build_from_inverse() are codings too; these
are the stock alternatives.

Key concepts:
    - Treatment coding: k-1 indicator columns, reference row all zeros
    - Deviation (sum) coding: k-1 columns summing to zero, last level -1
    - Helmert coding: level j vs. the mean of the levels before it
    - Polynomial coding: orthonormal trends over ordered levels
    - Row encoding: each observation takes its level's row of the coding
"""

from typing import Any

import numpy as np
import scipy.linalg as sla
from numpy.typing import NDArray

from pycontrasts.core.exceptions import DimensionError, ValidationError
from pycontrasts.core.validation import as_label, check_levels


def contr_treatment(
    levels: Any,
    reference: str | None = None,
) -> tuple[NDArray, tuple[str, ...]]:
    """
    Treatment (dummy) coding.

    Drops the reference level and creates k-1 indicator columns. The
    reference need not be the first level.

    Args:
        levels: ordered level names
        reference: baseline level (default: first level)

    Returns:
        (C, column_names) where:
            C: (k, k-1) float64 indicator matrix
            column_names: the k-1 non-reference level names
    """
    levels = check_levels(levels)
    if reference is None:
        reference = levels[0]
    reference = as_label(reference)
    if reference not in levels:
        raise ValidationError(
            f"reference: {reference!r} is not one of the levels {list(levels)}"
        )

    columns = tuple(level for level in levels if level != reference)
    k = len(levels)
    C = np.zeros((k, k - 1), dtype=np.float64)

    for j, level in enumerate(columns):
        C[levels.index(level), j] = 1.0

    return C, columns


def contr_sum(
    levels: Any,
) -> tuple[NDArray, tuple[str, ...]]:
    """
    Deviation (sum-to-zero) coding.

    Each column sums to zero across levels. The last level gets -1 in all
    columns, so coefficients are deviations of each level mean from the
    unweighted grand mean.

    Args:
        levels: ordered level names

    Returns:
        (C, column_names) where:
            C: (k, k-1) float64 deviation-coded matrix
            column_names: the first k-1 level names (last level is the reference)
    """
    levels = check_levels(levels)
    k = len(levels)

    C = np.zeros((k, k - 1), dtype=np.float64)
    for j in range(k - 1):
        C[j, j] = 1.0
        C[k - 1, j] = -1.0

    return C, levels[:-1]


def contr_helmert(
    levels: Any,
) -> tuple[NDArray, tuple[str, ...]]:
    """
    Helmert coding.

    Column j compares level j+1 with the levels before it: those get -1,
    level j+1 gets j+1, later levels 0. Columns are mutually orthogonal and
    each sums to zero, so they form a complete orthogonal contrast set.

    Args:
        levels: ordered level names

    Returns:
        (C, column_names) where:
            C: (k, k-1) float64 Helmert matrix
            column_names: levels[1:], the level each column singles out
    """
    levels = check_levels(levels)
    k = len(levels)

    C = np.zeros((k, k - 1), dtype=np.float64)
    for j in range(k - 1):
        C[:j + 1, j] = -1.0
        C[j + 1, j] = float(j + 1)

    return C, levels[1:]


def contr_poly(
    levels: Any,
) -> tuple[NDArray, tuple[str, ...]]:
    """
    Orthogonal polynomial coding for an ordered factor.

    Levels are scored 1..k and centered. The Vandermonde matrix of powers
    0..k-1 is orthogonalized by QR; dropping the constant column leaves
    k-1 orthonormal columns: linear, quadratic, cubic and so on. Signs
    follow a QR with a positive diagonal, so the linear column increases
    with the level order.

    Args:
        levels: ordered level names

    Returns:
        (C, column_names) where:
            C: (k, k-1) float64 orthonormal matrix, columns sum to zero
            column_names: '.L', '.Q', '.C', then '^4', '^5', ...
    """
    levels = check_levels(levels)
    k = len(levels)

    scores = np.arange(1, k + 1, dtype=np.float64)
    scores -= scores.mean()
    V = np.vander(scores, k, increasing=True)

    Q, R = sla.qr(V, mode='economic')
    Q = Q * np.sign(np.diag(R))

    names = ('.L', '.Q', '.C') + tuple(f"^{p}" for p in range(4, k))
    return np.ascontiguousarray(Q[:, 1:]), names[:k - 1]


def encode_rows(
    labels: Any,
    levels: tuple[str, ...],
    coding: NDArray,
) -> NDArray:
    """
    Expand a coding matrix to one row per observation.

    Args:
        labels: 1D array of level labels (strings or integers)
        levels: the factor's level order (rows of `coding`)
        coding: (k, c) coding matrix

    Returns:
        (n, c) float64 model matrix block
    """
    labels_arr = np.asarray(labels)
    if labels_arr.ndim != 1:
        raise DimensionError(
            f"labels: expected 1D, got {labels_arr.ndim}D with shape {labels_arr.shape}"
        )
    if coding.shape[0] != len(levels):
        raise DimensionError(
            f"coding: expected {len(levels)} rows, got {coding.shape[0]}"
        )

    labels_str = np.array([as_label(v) for v in labels_arr], dtype=str)
    unknown = sorted(set(labels_str) - set(levels))
    if unknown:
        raise ValidationError(
            f"labels: values {unknown} are not levels of the factor {list(levels)}"
        )

    n = len(labels_str)
    X = np.zeros((n, coding.shape[1]), dtype=np.float64)

    for i, level in enumerate(levels):
        X[labels_str == level, :] = coding[i, :]

    return X
