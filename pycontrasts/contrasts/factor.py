"""
Categorical factor with an ordered level set and an attachable coding.

The level order matters: contrast weights are matched to levels by
position, and the coding matrix rows follow the same order. A Factor is
immutable; relevel() and with_contrasts() return new factors.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pycontrasts.core.exceptions import DimensionError, ValidationError
from pycontrasts.core.validation import (
    as_label,
    check_array,
    check_2d,
    check_finite,
    check_levels,
)
from pycontrasts.contrasts._basis import invert_contrasts
from pycontrasts.contrasts._coding import contr_treatment, encode_rows
from pycontrasts.contrasts.solution import BasisSolution, ValidationSolution


@dataclass(frozen=True, eq=False)
class Factor:
    """
    A categorical predictor.

    Attributes:
        name: variable name, used as the prefix of model-matrix column names
        levels: ordered, unique level names
        reference: baseline level for treatment coding
        coding: attached (k, c) coding matrix, or None for treatment coding
        coding_names: column names of the attached coding
    """
    name: str
    levels: tuple[str, ...]
    reference: str
    coding: NDArray[np.floating[Any]] | None = None
    coding_names: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        levels = check_levels(self.levels, f"{self.name}.levels")
        object.__setattr__(self, 'levels', levels)
        if as_label(self.reference) not in levels:
            raise ValidationError(
                f"{self.name}: reference {self.reference!r} is not one of the "
                f"levels {list(levels)}"
            )
        object.__setattr__(self, 'reference', as_label(self.reference))

    @staticmethod
    def from_values(
        values: Any,
        *,
        name: str = 'factor',
        levels: Any = None,
        reference: str | None = None,
    ) -> 'Factor':
        """
        Build a factor from observed labels.

        Args:
            values: 1D labels, one per observation
            name: variable name
            levels: explicit level order; sorted unique labels when None
            reference: baseline level (default: first level)

        Returns:
            Factor
        """
        values_arr = np.asarray(values)
        if values_arr.ndim != 1:
            raise DimensionError(
                f"{name}: expected 1D, got {values_arr.ndim}D"
            )
        values_str = [as_label(v) for v in values_arr]

        if levels is None:
            level_names = tuple(sorted(set(values_str)))
        else:
            level_names = check_levels(levels, f"{name}.levels")
            unknown = sorted(set(values_str) - set(level_names))
            if unknown:
                raise ValidationError(
                    f"{name}: values {unknown} are not in levels {list(level_names)}"
                )

        if len(level_names) < 2:
            raise ValidationError(
                f"{name}: need at least 2 levels, got {len(level_names)}"
            )

        return Factor(
            name=name,
            levels=level_names,
            reference=level_names[0] if reference is None else as_label(reference),
        )

    @property
    def n_levels(self) -> int:
        return len(self.levels)

    def relevel(self, reference: str) -> 'Factor':
        """
        Move `reference` to the front of the level order.

        Any attached coding is dropped, since its rows followed the old
        order.
        """
        reference = as_label(reference)
        if reference not in self.levels:
            raise ValidationError(
                f"{self.name}: reference {reference!r} is not one of the "
                f"levels {list(self.levels)}"
            )
        levels = (reference,) + tuple(lv for lv in self.levels if lv != reference)
        return Factor(name=self.name, levels=levels, reference=reference)

    def with_contrasts(
        self,
        coding: 'BasisSolution | ValidationSolution | Any',
    ) -> 'Factor':
        """
        Attach a coding matrix.

        Args:
            coding: BasisSolution from build_from_inverse()/build_direct(),
                a complete ValidationSolution (its inverse basis is built
                here), or a (k, c) array with 1 <= c <= k - 1

        Returns:
            New Factor carrying the coding

        Raises:
            ValidationError: levels of a solution don't match the factor's
            SingularMatrixError: a ValidationSolution with fewer than k - 1
                contrasts, or linearly dependent ones
        """
        if isinstance(coding, (BasisSolution, ValidationSolution)):
            if coding.levels != self.levels:
                raise ValidationError(
                    f"{self.name}: contrast levels {list(coding.levels)} don't match "
                    f"factor levels {list(self.levels)}"
                )
            if isinstance(coding, BasisSolution):
                matrix = np.array(coding.matrix, dtype=np.float64)
            else:
                matrix, _, _ = invert_contrasts(coding.weights)
            names = tuple(coding.names)
        else:
            matrix = check_array(coding, f"{self.name}.coding")
            check_2d(matrix, f"{self.name}.coding")
            check_finite(matrix, f"{self.name}.coding")
            k = self.n_levels
            if matrix.shape[0] != k or not 1 <= matrix.shape[1] <= k - 1:
                raise DimensionError(
                    f"{self.name}.coding: expected shape ({k}, 1..{k - 1}), "
                    f"got {matrix.shape}"
                )
            names = tuple(str(j + 1) for j in range(matrix.shape[1]))

        return Factor(
            name=self.name,
            levels=self.levels,
            reference=self.reference,
            coding=matrix,
            coding_names=names,
        )

    @property
    def contrast_matrix(self) -> NDArray[np.floating[Any]]:
        """The attached coding, or treatment coding against the reference."""
        if self.coding is not None:
            return self.coding
        C, _ = contr_treatment(self.levels, self.reference)
        return C

    def column_names(self) -> tuple[str, ...]:
        """Model-matrix column names, R style: name + coding column."""
        if self.coding is not None:
            suffixes = self.coding_names
        else:
            _, suffixes = contr_treatment(self.levels, self.reference)
        return tuple(f"{self.name}{s}" for s in suffixes)

    def encode(self, labels: Any) -> NDArray[np.floating[Any]]:
        """(n, c) model-matrix block for the given observation labels."""
        return encode_rows(labels, self.levels, self.contrast_matrix)

    def __repr__(self) -> str:
        coding = 'treatment' if self.coding is None else f'custom{self.coding.shape}'
        return (
            f"Factor(name={self.name!r}, levels={list(self.levels)}, "
            f"reference={self.reference!r}, coding={coding})"
        )
