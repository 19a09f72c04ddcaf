"""
Collaborator protocols for PyContrasts.

PyContrasts does not fit models. It hands a coded Factor to whatever
linear-model fitter the caller uses and reads back an explicit result
record. These definitions pin down that seam.

Design Principles:
    - Minimal contracts: prescribe only what contrast work needs
    - Explicit record type with named fields, no dynamic lookup
    - Protocol (structural typing) so any fitter can satisfy it
"""

from dataclasses import dataclass
from typing import Protocol, Any, TYPE_CHECKING, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pycontrasts.contrasts.factor import Factor


@dataclass(frozen=True)
class ModelFit:
    """
    Result record returned by a model-fitting collaborator.

    Attributes:
        coefficients: (p,) estimates, intercept first
        standard_errors: (p,) standard errors of the estimates
        residuals: (n,) observed minus fitted
        fitted_values: (n,) model predictions
        coefficient_names: (p,) names aligned with coefficients
    """
    coefficients: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    coefficient_names: tuple[str, ...]

    def coefficient(self, name: str) -> float:
        """Look up a single coefficient by name."""
        try:
            idx = self.coefficient_names.index(name)
        except ValueError:
            raise KeyError(
                f"No coefficient {name!r}. Available: {list(self.coefficient_names)}"
            ) from None
        return float(self.coefficients[idx])


@runtime_checkable
class ModelFitter(Protocol):
    """
    Protocol for the linear-model fitter that consumes a coded Factor.

    The fitter builds its model matrix from factor.encode(labels) (plus an
    intercept) and returns a ModelFit. Its coefficient names for the factor
    columns should follow factor.column_names().
    """

    def fit(
        self,
        y: NDArray[np.floating[Any]],
        factor: 'Factor',
        labels: Any,
    ) -> ModelFit:
        """
        Fit y on the coded factor.

        Args:
            y: (n,) response
            factor: Factor with its coding attached
            labels: (n,) level label of each observation

        Returns:
            ModelFit record
        """
        ...
