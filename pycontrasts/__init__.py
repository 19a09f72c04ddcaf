"""
PyContrasts: planned contrasts for linear models in Python.

Build contrast weights for a categorical factor, check them against the
Seven Rules, turn them into the coding matrix a linear-model fitter
needs, and apply them to group means.

Submodules:
    contrasts: validation, basis construction, estimates, Factor
    core: exceptions, result envelope, validators, tolerances
"""

__version__ = "0.1.0"

from pycontrasts import contrasts
from pycontrasts.contrasts import (
    ContrastSpec,
    Factor,
    apply_to_means,
    build_direct,
    build_from_inverse,
    contr_helmert,
    contr_poly,
    contr_sum,
    contr_treatment,
    validate_contrasts,
)

__all__ = [
    "__version__",
    "contrasts",
    "ContrastSpec",
    "Factor",
    "apply_to_means",
    "build_direct",
    "build_from_inverse",
    "contr_helmert",
    "contr_poly",
    "contr_sum",
    "contr_treatment",
    "validate_contrasts",
]
