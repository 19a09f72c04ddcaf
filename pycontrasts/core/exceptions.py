"""
Exception hierarchy for PyContrasts.

All exceptions inherit from PyContrastsError to allow catching any
library-specific error. Contrast rule violations inherit from
ContrastRuleError so callers can report which contrast and which rule
failed.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyContrastsError(Exception):
    """Base exception for all PyContrasts errors."""
    pass


class ValidationError(PyContrastsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a weight vector's length doesn't match the number of
    factor levels, or a coding matrix has the wrong shape.
    """
    pass


class ContrastRuleError(ValidationError):
    """
    A contrast weight vector breaks one of the Seven Rules.

    Attributes:
        contrast_index: Zero-based position of the contrast in the set
        contrast_name: Name of the contrast
        rule: Number of the rule that was violated (1-7)
    """

    def __init__(
        self,
        message: str,
        contrast_index: int | None = None,
        contrast_name: str | None = None,
        rule: int | None = None,
    ):
        super().__init__(message)
        self.contrast_index = contrast_index
        self.contrast_name = contrast_name
        self.rule = rule


class SumNotZeroError(ContrastRuleError):
    """
    Contrast weights do not sum to zero (Rule 5).

    Attributes:
        total: The actual sum of the weights
    """

    def __init__(
        self,
        message: str,
        contrast_index: int | None = None,
        contrast_name: str | None = None,
        total: float | None = None,
    ):
        super().__init__(message, contrast_index, contrast_name, rule=5)
        self.total = total


class SignError(ContrastRuleError):
    """
    Non-zero weights are not split into one positive and one negative chunk
    (Rules 1 and 3).
    """

    def __init__(
        self,
        message: str,
        contrast_index: int | None = None,
        contrast_name: str | None = None,
    ):
        super().__init__(message, contrast_index, contrast_name, rule=3)


class ChunkReuseError(ContrastRuleError):
    """
    A level singled out in an earlier contrast is used again (Rule 2).

    Attributes:
        level: The reused level
        isolated_by: Index of the contrast that isolated the level
    """

    def __init__(
        self,
        message: str,
        contrast_index: int | None = None,
        contrast_name: str | None = None,
        level: str | None = None,
        isolated_by: int | None = None,
    ):
        super().__init__(message, contrast_index, contrast_name, rule=2)
        self.level = level
        self.isolated_by = isolated_by


class UnitScaleError(ContrastRuleError):
    """
    Chunk weights do not sum to +1 and -1 (Rule 6).

    Only raised when unit scaling is explicitly required.

    Attributes:
        positive_sum: Sum of the positive weights
        negative_sum: Sum of the negative weights
    """

    def __init__(
        self,
        message: str,
        contrast_index: int | None = None,
        contrast_name: str | None = None,
        positive_sum: float | None = None,
        negative_sum: float | None = None,
    ):
        super().__init__(message, contrast_index, contrast_name, rule=6)
        self.positive_sum = positive_sum
        self.negative_sum = negative_sum


class TooManyContrastsError(ValidationError):
    """
    More contrasts were supplied than the factor can support (Rule 7).

    Attributes:
        n_contrasts: Number of contrasts supplied
        max_contrasts: k - 1 for a factor with k levels
    """

    def __init__(
        self,
        message: str,
        n_contrasts: int | None = None,
        max_contrasts: int | None = None,
    ):
        super().__init__(message)
        self.rule = 7
        self.n_contrasts = n_contrasts
        self.max_contrasts = max_contrasts


class NumericalError(PyContrastsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular, numerically rank-deficient, or not square.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (the number of factor levels)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class ContrastWarning(UserWarning):
    """Advisory contrast rule violation (e.g. Rule 2 chunk reuse)."""
    pass
