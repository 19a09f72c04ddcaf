"""
The Seven Rules for planned contrasts.

    Rule 1: compare exactly two chunks of levels per contrast
    Rule 2: a level singled out in one contrast is zero in later ones
    Rule 3: one chunk positive, the other negative
    Rule 4: levels not in the contrast get weight 0
    Rule 5: weights sum to 0
    Rule 6: chunk weights sum to +1 / -1 (optional, for mean differences)
    Rule 7: at most k - 1 contrasts for k levels

A "chunk" is the set of levels sharing a sign, so Rules 1 and 3 reduce
to "at least one positive and at least one negative weight".

Rules 1, 3, 4, 5 and 7 are hard failures. Rule 6 fails only when asked
to. Rule 2 is reported, not enforced, by default: this module only finds
the reuses and the solver decides what to do with them.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pycontrasts.core.exceptions import (
    SignError,
    SumNotZeroError,
    TooManyContrastsError,
    UnitScaleError,
)
from pycontrasts.contrasts._common import NormalizedContrast


def check_contrast_count(n_contrasts: int, n_levels: int) -> None:
    """Rule 7: a factor with k levels supports at most k - 1 contrasts."""
    max_contrasts = n_levels - 1
    if n_contrasts > max_contrasts:
        raise TooManyContrastsError(
            f"{n_contrasts} contrasts supplied for a factor with {n_levels} levels; "
            f"at most k - 1 = {max_contrasts} are possible",
            n_contrasts=n_contrasts,
            max_contrasts=max_contrasts,
        )


def normalize_contrast(
    weights: NDArray[np.floating[Any]],
    levels: tuple[str, ...],
    *,
    index: int,
    name: str,
    tol: float,
    require_unit_scale: bool = False,
) -> NormalizedContrast:
    """
    Check one weight vector against Rules 1, 3, 4, 5 (and 6 if required).

    Args:
        weights: (k,) weights in level order
        levels: level names
        index: position of the contrast in its set (for error context)
        name: contrast name (for error context)
        tol: absolute tolerance for zero weights and the zero sum
        require_unit_scale: raise UnitScaleError when Rule 6 fails

    Returns:
        NormalizedContrast with near-zero weights snapped to 0.0
    """
    total = float(np.sum(weights))
    if abs(total) > tol:
        raise SumNotZeroError(
            f"contrast {index} ({name!r}): weights sum to {total:.6g}, expected 0 "
            f"(tolerance {tol:g})",
            contrast_index=index,
            contrast_name=name,
            total=total,
        )

    positive = weights > tol
    negative = weights < -tol
    if not positive.any() or not negative.any():
        n_pos = int(positive.sum())
        n_neg = int(negative.sum())
        raise SignError(
            f"contrast {index} ({name!r}): need one positive and one negative chunk, "
            f"got {n_pos} positive and {n_neg} negative weights",
            contrast_index=index,
            contrast_name=name,
        )

    clean = np.where(positive | negative, weights, 0.0).astype(np.float64)
    positive_sum = float(clean[positive].sum())
    negative_sum = float(clean[negative].sum())
    is_unit_scaled = abs(positive_sum - 1.0) <= tol and abs(negative_sum + 1.0) <= tol

    if require_unit_scale and not is_unit_scaled:
        raise UnitScaleError(
            f"contrast {index} ({name!r}): chunk sums are {positive_sum:.6g} and "
            f"{negative_sum:.6g}, expected +1 and -1 for a mean-difference estimate",
            contrast_index=index,
            contrast_name=name,
            positive_sum=positive_sum,
            negative_sum=negative_sum,
        )

    zero = ~(positive | negative)
    return NormalizedContrast(
        name=name,
        weights=clean,
        positive_levels=tuple(lv for lv, m in zip(levels, positive) if m),
        negative_levels=tuple(lv for lv, m in zip(levels, negative) if m),
        zero_levels=tuple(lv for lv, m in zip(levels, zero) if m),
        positive_sum=positive_sum,
        negative_sum=negative_sum,
        is_unit_scaled=is_unit_scaled,
    )


def find_chunk_reuse(
    contrasts: tuple[NormalizedContrast, ...],
) -> list[tuple[int, str, int]]:
    """
    Rule 2: find levels used again after being singled out.

    A level is singled out when it forms a chunk on its own. Any later
    contrast giving it a non-zero weight reuses it.

    Returns:
        (contrast_index, level, isolated_by) for every reuse, in order
    """
    isolated: dict[str, int] = {}
    reuses: list[tuple[int, str, int]] = []

    for i, contrast in enumerate(contrasts):
        for level in contrast.positive_levels + contrast.negative_levels:
            if level in isolated:
                reuses.append((i, level, isolated[level]))

        for chunk in (contrast.positive_levels, contrast.negative_levels):
            if len(chunk) == 1:
                isolated.setdefault(chunk[0], i)

    return reuses


def find_non_orthogonal_pairs(
    weights: NDArray[np.floating[Any]],
    tol: float,
) -> list[tuple[int, int]]:
    """
    Pairs of contrasts whose weight vectors have a non-zero dot product.

    Args:
        weights: (m, k) contrasts as rows

    Returns:
        (i, j) index pairs with i < j
    """
    gram = weights @ weights.T
    m = weights.shape[0]
    pairs = []
    for i in range(m):
        for j in range(i + 1, m):
            if abs(gram[i, j]) > tol:
                pairs.append((i, j))
    return pairs
