"""
Linear regression.

Public API:
    fit_simple(x, y) -> LinearSolution     # one predictor, closed form
    fit(X, y, ...) -> LinearSolution       # k predictors, normal equations

Both entry points handle:
    - Input validation
    - Design construction
    - Backend call
    - Result wrapping

Example:
    >>> from pystatengine.regression import fit_simple
    >>> result = fit_simple(x, y)
    >>> print(result.coefficient_of_determination)
    >>> print(result.summary())
"""

from pystatengine.regression.design import RegressionDesign
from pystatengine.regression.solution import LinearSolution, LinearParams
from pystatengine.regression.solvers import fit, fit_simple

__all__ = [
    "fit",
    "fit_simple",
    "RegressionDesign",
    "LinearSolution",
    "LinearParams",
]
