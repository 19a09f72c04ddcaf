"""
Planned contrasts for categorical factors.

Public API:
    validate_contrasts(levels, contrasts, ...) -> ValidationSolution   # Seven Rules
    build_from_inverse(levels, contrasts, ...) -> BasisSolution        # coding for lm
    build_direct(levels, contrasts, ...) -> BasisSolution              # uninverted coding
    apply_to_means(contrast_set, group_means) -> EstimateSolution      # contrast estimates
    Factor                                                             # levels + coding
    contr_treatment / contr_sum / contr_helmert / contr_poly           # stock codings
"""

from pycontrasts.contrasts.solvers import (
    apply_to_means,
    build_direct,
    build_from_inverse,
    validate_contrasts,
)
from pycontrasts.contrasts.solution import (
    BasisSolution,
    EstimateSolution,
    ValidationSolution,
)
from pycontrasts.contrasts._coding import (
    contr_helmert,
    contr_poly,
    contr_sum,
    contr_treatment,
)
from pycontrasts.contrasts._common import ContrastSpec, NormalizedContrast
from pycontrasts.contrasts.factor import Factor

__all__ = [
    "apply_to_means",
    "build_direct",
    "build_from_inverse",
    "validate_contrasts",
    "BasisSolution",
    "EstimateSolution",
    "ValidationSolution",
    "contr_helmert",
    "contr_poly",
    "contr_sum",
    "contr_treatment",
    "ContrastSpec",
    "NormalizedContrast",
    "Factor",
]
