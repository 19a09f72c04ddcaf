"""
Tolerance tiers for contrast validation.

Contrast weights are typed in by hand (0.5, 1/3, ...) so exact float
comparison is never appropriate. These tiers are the single source of
truth for "close enough to zero" across validation and basis construction.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Default for the Seven Rules: sums, zero-weights and unit-scale chunk sums
CONTRAST_FP64 = ToleranceTier(
    rtol=0.0,
    atol=1e-9,
    name='contrast_fp64',
    description='Weight sums and zero detection in double precision',
)

# Stacked contrast matrices with a condition number beyond this are
# treated as singular: the inverse carries no correct digits.
SINGULAR_CONDITION_THRESHOLD = 1.0 / np.finfo(np.float64).eps
