"""
Common data types for planned contrasts.

Contains the frozen parameter payloads that go inside Result[P] envelopes.
Each payload is a pure data container with no computation.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class ContrastSpec:
    """A named weight vector, one weight per factor level (in level order)."""
    name: str
    weights: tuple[float, ...]


@dataclass(frozen=True, eq=False)
class NormalizedContrast:
    """
    One contrast after the Seven Rules have been checked.

    Weights within tolerance of zero are stored as exactly 0.0 (Rule 4).
    """
    name: str
    weights: NDArray[np.floating[Any]]     # (k,)
    positive_levels: tuple[str, ...]
    negative_levels: tuple[str, ...]
    zero_levels: tuple[str, ...]
    positive_sum: float
    negative_sum: float
    is_unit_scaled: bool                   # Rule 6: +1 / -1 chunk sums


@dataclass(frozen=True, eq=False)
class ValidationParams:
    """Parameter payload for validate_contrasts()."""
    levels: tuple[str, ...]
    contrasts: tuple[NormalizedContrast, ...]
    max_contrasts: int                                  # k - 1
    is_orthogonal: bool
    non_orthogonal_pairs: tuple[tuple[int, int], ...]   # contrast index pairs
    reused_levels: tuple[tuple[int, str], ...]          # (contrast index, level), Rule 2


@dataclass(frozen=True, eq=False)
class BasisParams:
    """
    Parameter payload for build_from_inverse() / build_direct().

    matrix rows follow `levels`, columns follow `names`.
    """
    levels: tuple[str, ...]
    names: tuple[str, ...]
    weights: NDArray[np.floating[Any]]     # (m, k) requested contrasts as rows
    matrix: NDArray[np.floating[Any]]      # (k, m) coding handed to the fitter
    method: str                            # 'inverse' or 'direct'
    stacked: NDArray[np.floating[Any]] | None    # (k, k) matrix that was inverted
    condition_number: float | None


@dataclass(frozen=True)
class ContrastEstimate:
    """One contrast applied to the group means."""
    label: str
    estimate: float


@dataclass(frozen=True)
class EstimateParams:
    """Parameter payload for apply_to_means()."""
    levels: tuple[str, ...]
    group_means: tuple[float, ...]         # aligned with levels
    estimates: tuple[ContrastEstimate, ...]
