"""
Solver dispatch for regression.

This module provides fit_simple() and fit() (public API).
"""

from __future__ import annotations

from typing import Sequence
from numpy.typing import ArrayLike

from pystatengine.core.protocols import Distributions
from pystatengine.regression.design import RegressionDesign
from pystatengine.regression.solution import LinearSolution
from pystatengine.regression.backends.cpu import CPURegressionBackend


def fit_simple(
    x: ArrayLike,
    y: ArrayLike,
    *,
    distributions: Distributions | None = None,
) -> LinearSolution:
    """
    Fit y = m x + b by least squares, in closed form.

    Args:
        x: Independent variable (1D, at least 3 points)
        y: Dependent variable (1D, same length as x)
        distributions: Source of the t CDF for coefficient p-values

    Returns:
        LinearSolution with slope, intercept, coefficient_of_determination,
        standard_error and equation ("y = 2.0000x + 0.0000")

    Raises:
        InputError: If inputs are not numeric or fewer than 3 points
        DimensionError: If x and y differ in length
        ComputationError: If all x or all y values are identical

    Example:
        >>> from pystatengine.regression import fit_simple
        >>> result = fit_simple([1, 2, 3, 4, 5], [2, 4, 6, 8, 10])
        >>> result.equation
        'y = 2.0000x + 0.0000'
    """
    design = RegressionDesign.for_simple(x, y)
    result = CPURegressionBackend(distributions).solve(design)
    return LinearSolution(_result=result, _design=design)


def fit(
    X: ArrayLike,
    y: ArrayLike,
    *,
    names: Sequence[str] | None = None,
    distributions: Distributions | None = None,
) -> LinearSolution:
    """
    Fit a multiple linear regression model with intercept.

    Solves the normal equations:
        beta = (X'X)^-1 X'y
    where X gets a leading column of ones.

    Args:
        X: Predictor matrix (n x k), without an intercept column.
            A 1D X is a single predictor.
        y: Response vector (n,).
        names: Predictor names for the equation (default x1..xk)
        distributions: Source of the t CDF for coefficient p-values

    Returns:
        LinearSolution with coefficients, diagnostics, and summary methods

    Raises:
        InputError: If inputs are invalid or n < k + 2
        DimensionError: If X and y have inconsistent dimensions
        SingularMatrixError: If X'X is rank-deficient
        ComputationError: If all y values are identical

    Example:
        >>> import numpy as np
        >>> from pystatengine.regression import fit
        >>>
        >>> X = np.random.randn(100, 2)
        >>> y = 1 + X @ [2, -0.5] + np.random.randn(100) * 0.1
        >>>
        >>> result = fit(X, y)
        >>> print(result.equation)
        >>> print(result.summary())
    """
    design = RegressionDesign.for_multiple(X, y, names=names)
    result = CPURegressionBackend(distributions).solve(design)
    return LinearSolution(_result=result, _design=design)
