"""
Contrast design object.

Wraps validated level names and contrast weight vectors. Handles the
shapes users write contrasts in: a dict like R's
list(any_vs_none = c(-1, 0.5, 0.5), ...), a list of vectors, a 2D array
with one contrast per row, or ContrastSpec objects. Group means are
aligned to the level order the same way for every entry point.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pycontrasts.core.exceptions import DimensionError, ValidationError
from pycontrasts.core.validation import (
    as_label,
    check_array,
    check_finite,
    check_1d,
    check_length,
    check_levels,
)
from pycontrasts.contrasts._common import ContrastSpec


@dataclass(frozen=True, eq=False)
class ContrastDesign:
    """
    Validated data container for contrast operations.

    Created via for_contrasts(), not directly. Only shapes and values are
    checked here; the Seven Rules are checked by the solvers.
    """
    levels: tuple[str, ...]
    names: tuple[str, ...]
    weights: NDArray[np.floating[Any]]    # (m, k), one contrast per row
    k: int
    m: int

    @staticmethod
    def for_contrasts(
        levels: Any,
        contrasts: Any,
    ) -> 'ContrastDesign':
        """
        Create design from level names and contrast weights.

        Args:
            levels: ordered level names, or a Factor
            contrasts: {name: weights}, sequence of weight vectors,
                sequence of ContrastSpec, or (m, k) array

        Returns:
            ContrastDesign
        """
        level_names = resolve_levels(levels)
        k = len(level_names)

        names, raw = _split_contrasts(contrasts)
        if len(raw) == 0:
            raise ValidationError("contrasts: need at least 1 contrast, got 0")

        if len(set(names)) != len(names):
            raise ValidationError(
                f"contrasts: names must be unique, got {list(names)}"
            )

        rows = []
        for name, w in zip(names, raw):
            label = f"contrast {name!r}"
            w_arr = check_array(w, label)
            check_1d(w_arr, label)
            check_length(w_arr, k, label)
            check_finite(w_arr, label)
            rows.append(w_arr)

        return ContrastDesign(
            levels=level_names,
            names=tuple(names),
            weights=np.vstack(rows),
            k=k,
            m=len(rows),
        )


def resolve_levels(levels: Any) -> tuple[str, ...]:
    """Level names from a Factor or a plain sequence."""
    factor_levels = getattr(levels, 'levels', None)
    if factor_levels is not None:
        return check_levels(factor_levels)
    return check_levels(levels)


def _split_contrasts(contrasts: Any) -> tuple[list[str], list[Any]]:
    """Separate names from weight vectors, auto-naming unnamed ones c1, c2, ..."""
    if isinstance(contrasts, ContrastSpec):
        return [contrasts.name], [contrasts.weights]

    if isinstance(contrasts, Mapping):
        return [str(name) for name in contrasts.keys()], list(contrasts.values())

    if isinstance(contrasts, np.ndarray):
        if contrasts.ndim == 1:
            contrasts = contrasts.reshape(1, -1)
        return [f"c{i + 1}" for i in range(contrasts.shape[0])], list(contrasts)

    if isinstance(contrasts, (str, bytes)):
        raise ValidationError(
            f"contrasts: expected weight vectors, got {type(contrasts).__name__}"
        )

    try:
        items = list(contrasts)
    except TypeError:
        raise ValidationError(
            f"contrasts: expected weight vectors, got {type(contrasts).__name__}"
        ) from None

    # A single flat vector like [-1, 0.5, 0.5]
    if items and all(np.isscalar(v) and not isinstance(v, str) for v in items):
        return ["c1"], [items]

    names: list[str] = []
    raw: list[Any] = []
    for i, item in enumerate(items):
        if isinstance(item, ContrastSpec):
            names.append(item.name)
            raw.append(item.weights)
        else:
            names.append(f"c{i + 1}")
            raw.append(item)
    return names, raw


def align_means(
    group_means: Any,
    levels: tuple[str, ...],
) -> NDArray[np.floating[Any]]:
    """
    Group means as a float64 vector in level order.

    Args:
        group_means: {level: mean} covering exactly `levels`, or a sequence
            of means in level order
        levels: level names

    Returns:
        (k,) finite means
    """
    if isinstance(group_means, Mapping):
        means_by_level = {as_label(k): v for k, v in group_means.items()}
        missing = [lv for lv in levels if lv not in means_by_level]
        extra = sorted(set(means_by_level) - set(levels))
        if missing or extra:
            raise ValidationError(
                f"group_means: keys must match the levels {list(levels)}; "
                f"missing {missing}, unexpected {extra}"
            )
        means = check_array([means_by_level[lv] for lv in levels], "group_means")
    else:
        means = check_array(group_means, "group_means")
        check_1d(means, "group_means")
        if means.shape[0] != len(levels):
            raise DimensionError(
                f"group_means: expected {len(levels)} means (one per level), "
                f"got {means.shape[0]}"
            )

    check_finite(means, "group_means")
    return means
