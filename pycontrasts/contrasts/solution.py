"""
User-facing contrast solution types.

Each solution wraps a Result[Params] and provides convenient accessors
and a formatted summary.
"""

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from pycontrasts.core.result import Result
from pycontrasts.contrasts._basis import solve_saturated
from pycontrasts.contrasts._common import (
    BasisParams,
    EstimateParams,
    NormalizedContrast,
    ValidationParams,
)
from pycontrasts.contrasts.design import align_means


# =====================================================================
# ValidationSolution  (a validated ContrastSet)
# =====================================================================


@dataclass
class ValidationSolution:
    """
    A contrast set that passed the hard rules.

    Produced by validate_contrasts(). Iterating yields NormalizedContrast
    objects in the order they were supplied.
    """
    _result: Result[ValidationParams]

    @property
    def levels(self) -> tuple[str, ...]:
        return self._result.params.levels

    @property
    def contrasts(self) -> tuple[NormalizedContrast, ...]:
        return self._result.params.contrasts

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.contrasts)

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        """(m, k) normalized weights, one contrast per row."""
        return np.vstack([c.weights for c in self.contrasts])

    @property
    def max_contrasts(self) -> int:
        return self._result.params.max_contrasts

    @property
    def is_complete(self) -> bool:
        """True when the set has the full k - 1 contrasts."""
        return len(self.contrasts) == self.max_contrasts

    @property
    def is_orthogonal(self) -> bool:
        return self._result.params.is_orthogonal

    @property
    def non_orthogonal_pairs(self) -> tuple[tuple[int, int], ...]:
        return self._result.params.non_orthogonal_pairs

    @property
    def is_unit_scaled(self) -> bool:
        """True when every contrast estimates a plain mean difference (Rule 6)."""
        return all(c.is_unit_scaled for c in self.contrasts)

    @property
    def reused_levels(self) -> tuple[tuple[int, str], ...]:
        return self._result.params.reused_levels

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    def __len__(self) -> int:
        return len(self.contrasts)

    def __iter__(self) -> Iterator[NormalizedContrast]:
        return iter(self.contrasts)

    def summary(self) -> str:
        """Weights table with chunk sums."""
        width = max(10, *(len(lv) for lv in self.levels))
        name_width = max(12, *(len(n) for n in self.names))
        header = f"{'Contrast':<{name_width}} " + " ".join(
            f"{lv:>{width}}" for lv in self.levels
        ) + f" {'Pos sum':>9} {'Neg sum':>9}"

        lines = [
            "Planned Contrasts",
            "=" * len(header),
            f"Levels: {len(self.levels)}    Contrasts: {len(self)} "
            f"(max {self.max_contrasts})",
            "",
            header,
            "-" * len(header),
        ]
        for c in self.contrasts:
            row = f"{c.name:<{name_width}} " + " ".join(
                f"{w:>{width}.4g}" for w in c.weights
            )
            flag = "" if c.is_unit_scaled else "  (not unit-scaled)"
            lines.append(row + f" {c.positive_sum:>9.4g} {c.negative_sum:>9.4g}{flag}")
        lines.append("-" * len(header))
        lines.append(f"Orthogonal: {'yes' if self.is_orthogonal else 'no'}")

        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            for w in self.warnings:
                lines.append(f"  {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ValidationSolution(k={len(self.levels)}, contrasts={list(self.names)}, "
            f"orthogonal={self.is_orthogonal})"
        )


# =====================================================================
# BasisSolution  (coding matrix for the model fitter)
# =====================================================================


@dataclass
class BasisSolution:
    """
    Coding matrix built from a contrast set.

    Produced by build_from_inverse() and build_direct(). Attach it to a
    Factor with Factor.with_contrasts().
    """
    _result: Result[BasisParams]

    @property
    def matrix(self) -> NDArray[np.floating[Any]]:
        """(k, m) coding: rows follow levels, columns follow names."""
        return self._result.params.matrix

    @property
    def levels(self) -> tuple[str, ...]:
        return self._result.params.levels

    @property
    def names(self) -> tuple[str, ...]:
        return self._result.params.names

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        """(m, k) the requested contrasts, one per row."""
        return self._result.params.weights

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def stacked(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.stacked

    @property
    def condition_number(self) -> float | None:
        return self._result.params.condition_number

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def implied_coefficients(self, group_means: Any) -> tuple[float, NDArray]:
        """
        Coefficients a saturated model with this coding would report.

        Args:
            group_means: {level: mean} or a (k,) sequence in level order,
                as accepted by apply_to_means()

        Returns:
            (intercept, coefficients) with coefficients aligned to names
        """
        means = align_means(group_means, self.levels)
        return solve_saturated(self.matrix, means)

    def summary(self) -> str:
        width = max(12, *(len(n) for n in self.names))
        level_width = max(10, *(len(lv) for lv in self.levels))
        header = f"{'Level':<{level_width}} " + " ".join(
            f"{n:>{width}}" for n in self.names
        )
        lines = [
            f"Contrast Coding ({self.method})",
            "=" * len(header),
            header,
            "-" * len(header),
        ]
        for lv, row in zip(self.levels, self.matrix):
            lines.append(
                f"{lv:<{level_width}} " + " ".join(f"{v:>{width}.6f}" for v in row)
            )
        lines.append("-" * len(header))
        if self.condition_number is not None:
            lines.append(f"Condition number of stacked matrix: {self.condition_number:.4g}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"BasisSolution(method={self.method!r}, shape={self.matrix.shape}, "
            f"names={list(self.names)})"
        )


# =====================================================================
# EstimateSolution  (contrasts applied to group means)
# =====================================================================


@dataclass
class EstimateSolution:
    """
    Contrast estimates from group means.

    Produced by apply_to_means(). Standard errors and tests belong to the
    model fitter; this only carries the point estimates.
    """
    _result: Result[EstimateParams]

    @property
    def estimates(self) -> tuple[tuple[str, float], ...]:
        """(label, estimate) per contrast, in contrast order."""
        return tuple((e.label, e.estimate) for e in self._result.params.estimates)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(e.label for e in self._result.params.estimates)

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        return np.array([e.estimate for e in self._result.params.estimates])

    @property
    def group_means(self) -> dict[str, float]:
        params = self._result.params
        return dict(zip(params.levels, params.group_means))

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    def __getitem__(self, label: str) -> float:
        for e in self._result.params.estimates:
            if e.label == label:
                return e.estimate
        raise KeyError(f"No contrast {label!r}. Available: {list(self.labels)}")

    def as_dict(self) -> dict[str, float]:
        return dict(self.estimates)

    def summary(self) -> str:
        width = max(20, *(len(lb) for lb in self.labels))
        lines = [
            "Contrast Estimates",
            "=" * (width + 16),
            f"{'Contrast':<{width}} {'Estimate':>15}",
            "-" * (width + 16),
        ]
        for label, est in self.estimates:
            lines.append(f"{label:<{width}} {est:>15.6f}")
        lines.append("-" * (width + 16))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"EstimateSolution({self.as_dict()!r})"
