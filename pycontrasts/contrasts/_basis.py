"""
Turning contrast weights into a coding matrix.

If the requested contrasts C (m x k) are handed to a linear model as the
factor's coding directly, the fitted coefficients are only proportional
to the contrasts. To make the coefficients equal C @ means exactly, the
coding must be the generalized inverse of C:

    M = [1; C]            k x k, a placeholder row of ones on top
    B = M^{-1}[:, 1:]     k x (k-1), drop the placeholder's column

Since M @ M^{-1} = I, the first row gives 1' B = 0: every column of B
sums to zero. With a saturated model, means = [1 | B] @ beta, and beta
= (mean of means, C @ means).
"""

from typing import Any

import numpy as np
import scipy.linalg as sla
from numpy.typing import NDArray

from pycontrasts.core.exceptions import SingularMatrixError
from pycontrasts.core.tolerances import SINGULAR_CONDITION_THRESHOLD


def stack_with_placeholder(weights: NDArray[np.floating[Any]]) -> NDArray:
    """Prepend a row of ones to the (m, k) contrast rows."""
    k = weights.shape[1]
    return np.vstack([np.ones((1, k), dtype=np.float64), weights])


def invert_contrasts(
    weights: NDArray[np.floating[Any]],
) -> tuple[NDArray, NDArray, float]:
    """
    Coding matrix whose coefficients equal the requested contrasts.

    Args:
        weights: (m, k) contrasts as rows; m must be k - 1

    Returns:
        (B, M, cond) where:
            B: (k, k-1) coding matrix
            M: (k, k) stacked matrix that was inverted
            cond: 2-norm condition number of M

    Raises:
        SingularMatrixError: If M is not square or not invertible
    """
    M = stack_with_placeholder(weights)
    n_rows, k = M.shape

    if n_rows != k:
        rank = int(np.linalg.matrix_rank(M))
        raise SingularMatrixError(
            f"stacked contrast matrix is {n_rows} x {k}, not square: "
            f"{k - 1} contrasts are needed for {k} levels, got {n_rows - 1}",
            matrix_name='stacked contrast matrix',
            rank=rank,
            expected_rank=k,
        )

    cond = float(np.linalg.cond(M))
    rank = int(np.linalg.matrix_rank(M))
    if rank < k or not np.isfinite(cond) or cond > SINGULAR_CONDITION_THRESHOLD:
        raise SingularMatrixError(
            f"stacked contrast matrix is singular (rank={rank}, expected={k}, "
            f"condition number={cond:.3g}); the contrasts are linearly dependent "
            f"or not orthogonal to the intercept",
            matrix_name='stacked contrast matrix',
            condition_number=cond,
            rank=rank,
            expected_rank=k,
        )

    try:
        M_inv = sla.inv(M)
    except sla.LinAlgError as e:
        raise SingularMatrixError(
            f"stacked contrast matrix could not be inverted: {e}",
            matrix_name='stacked contrast matrix',
            condition_number=cond,
            rank=rank,
            expected_rank=k,
        ) from e

    return M_inv[:, 1:], M, cond


def bind_contrasts(weights: NDArray[np.floating[Any]]) -> NDArray:
    """
    Use the contrasts as coding columns without inversion.

    Coefficients are then proportional to, not equal to, the contrasts
    unless the contrasts are orthogonal with equal norms.
    """
    return np.ascontiguousarray(weights.T, dtype=np.float64)


def solve_saturated(
    coding: NDArray[np.floating[Any]],
    group_means: NDArray[np.floating[Any]],
) -> tuple[float, NDArray]:
    """
    Coefficients of a saturated one-factor model with the given coding.

    Solves [1 | coding] @ beta = group_means. This is what least squares
    returns for a one-way model, since the fitted values are the cell means.

    Args:
        coding: (k, k-1) coding matrix
        group_means: (k,) cell means in level order

    Returns:
        (intercept, coefficients)

    Raises:
        SingularMatrixError: If [1 | coding] is not invertible
    """
    k = coding.shape[0]
    if coding.shape[1] != k - 1:
        raise SingularMatrixError(
            f"coding has {coding.shape[1]} columns, a saturated model needs {k - 1}",
            matrix_name='cell model matrix',
            expected_rank=k,
        )

    X = np.column_stack([np.ones(k, dtype=np.float64), coding])
    try:
        beta = sla.solve(X, group_means)
    except sla.LinAlgError as e:
        raise SingularMatrixError(
            f"cell model matrix is singular: {e}",
            matrix_name='cell model matrix',
            rank=int(np.linalg.matrix_rank(X)),
            expected_rank=k,
        ) from e

    return float(beta[0]), beta[1:]
