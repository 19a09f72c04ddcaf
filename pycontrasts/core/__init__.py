"""
Core infrastructure for PyContrasts.

Key components:
    protocols: ModelFit record, ModelFitter protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    tolerances: Numerical tolerance tiers
"""

from pycontrasts.core.protocols import ModelFit, ModelFitter
from pycontrasts.core.result import Result
from pycontrasts.core.exceptions import (
    PyContrastsError,
    ValidationError,
    DimensionError,
    ContrastRuleError,
    SumNotZeroError,
    SignError,
    ChunkReuseError,
    UnitScaleError,
    TooManyContrastsError,
    NumericalError,
    SingularMatrixError,
    ContrastWarning,
)

__all__ = [
    # Protocols
    "ModelFit",
    "ModelFitter",
    # Result
    "Result",
    # Exceptions
    "PyContrastsError",
    "ValidationError",
    "DimensionError",
    "ContrastRuleError",
    "SumNotZeroError",
    "SignError",
    "ChunkReuseError",
    "UnitScaleError",
    "TooManyContrastsError",
    "NumericalError",
    "SingularMatrixError",
    "ContrastWarning",
]
