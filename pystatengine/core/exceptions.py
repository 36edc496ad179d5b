"""
Exception hierarchy for pystatengine.

All exceptions inherit from PyStatEngineError so callers (an HTTP layer,
a CLI) can translate any library failure with one except clause.

Three families:
    - InputError: the caller handed us something unusable
    - DomainError: a well-formed request for something we don't support
    - ComputationError: valid inputs, degenerate numerics

Messages state the actual value next to what was expected.
"""


class PyStatEngineError(Exception):
    """Base exception for all pystatengine errors."""
    pass


class InputError(PyStatEngineError):
    """
    Input validation failed.

    Raised for non-array or non-numeric input, empty samples, non-finite
    values, and samples smaller than the test requires.
    """
    pass


class DimensionError(InputError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when paired samples differ in length or when an array has the
    wrong number of dimensions.
    """
    pass


class DomainError(PyStatEngineError):
    """
    Unsupported option value.

    Raised for an unknown alternative hypothesis selector or an unknown
    chi-square test type / column-count combination.

    Attributes:
        option: Name of the offending option
        value: The value that was rejected
    """

    def __init__(
        self,
        message: str,
        option: str | None = None,
        value: object = None,
    ):
        super().__init__(message)
        self.option = option
        self.value = value


class ComputationError(PyStatEngineError):
    """
    Numerical computation failed.

    Raised for zero-variance denominators, identical predictor values,
    and non-finite results.
    """
    pass


class SingularMatrixError(ComputationError):
    """
    Matrix is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Rank required for a unique solution
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
