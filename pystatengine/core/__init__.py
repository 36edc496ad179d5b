"""
Core infrastructure for pystatengine.

Shared abstractions and utilities used by every domain subpackage
(descriptive, hypothesis, anova, regression).

Key components:
    protocols: Distributions capability, Backend protocol
    distributions: scipy-backed default Distributions
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    encoding: Factor encoding for categorical columns
    constants: Defaults and option strings
"""

from pystatengine.core.protocols import Distributions, Backend
from pystatengine.core.distributions import ScipyDistributions, DEFAULT_DISTRIBUTIONS
from pystatengine.core.result import Result
from pystatengine.core.encoding import FactorEncoding
from pystatengine.core.exceptions import (
    PyStatEngineError,
    InputError,
    DimensionError,
    DomainError,
    ComputationError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "Distributions",
    "Backend",
    "ScipyDistributions",
    "DEFAULT_DISTRIBUTIONS",
    # Result
    "Result",
    # Encoding
    "FactorEncoding",
    # Exceptions
    "PyStatEngineError",
    "InputError",
    "DimensionError",
    "DomainError",
    "ComputationError",
    "SingularMatrixError",
]
