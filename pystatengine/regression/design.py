"""
Regression Design.

Design holds the validated response y and the design matrix X with a
leading column of ones for the intercept. It knows which fitting route
applies: the closed-form simple regression or the normal equations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pystatengine.core.exceptions import InputError
from pystatengine.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_2d,
    check_consistent_length,
    check_min_samples,
)

SIMPLE = 'simple'
NORMAL_EQUATIONS = 'normal_equations'


@dataclass(frozen=True)
class RegressionDesign:
    """
    Regression design matrix and response.

    Immutable after construction.

    Construction:
        RegressionDesign.for_simple(x, y)                 # one predictor, closed form
        RegressionDesign.for_multiple(X, y, names=...)    # k predictors
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _k: int
    _names: tuple[str, ...]
    _method: str

    @classmethod
    def for_simple(cls, x: ArrayLike, y: ArrayLike) -> RegressionDesign:
        """
        Build design for y = m x + b.

        Requires equal lengths and at least 3 points.
        """
        x_arr = check_array(x, 'x')
        y_arr = check_array(y, 'y')
        check_1d(x_arr, 'x')
        check_1d(y_arr, 'y')
        check_finite(x_arr, 'x')
        check_finite(y_arr, 'y')
        check_consistent_length(x_arr, y_arr, names=('x', 'y'))
        check_min_samples(x_arr, 3, 'x')

        X = np.column_stack([np.ones(len(x_arr)), x_arr])
        return cls(
            _X=X, _y=y_arr, _n=len(y_arr), _k=1, _names=('x',), _method=SIMPLE,
        )

    @classmethod
    def for_multiple(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        names: Sequence[str] | None = None,
    ) -> RegressionDesign:
        """
        Build design for y = b0 + b1 x1 + ... + bk xk.

        X is n x k (a 1D X is one predictor). The intercept column is
        added here; do not include one. Requires n >= k + 2 so that the
        residual standard error has at least one degree of freedom.
        """
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')

        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()

        check_2d(X_arr, 'X')
        check_1d(y_arr, 'y')
        check_finite(X_arr, 'X')
        check_finite(y_arr, 'y')
        check_consistent_length(X_arr, y_arr, names=('X', 'y'))

        n, k = X_arr.shape
        if k < 1:
            raise InputError("X: need at least one predictor column")
        check_min_samples(X_arr, k + 2, 'X')

        if names is None:
            names = tuple(f"x{j + 1}" for j in range(k))
        else:
            names = tuple(str(name) for name in names)
            if len(names) != k:
                raise InputError(
                    f"names: {len(names)} names given for {k} predictors"
                )

        design = np.column_stack([np.ones(n), X_arr])
        return cls(
            _X=design, _y=y_arr, _n=n, _k=k, _names=names, _method=NORMAL_EQUATIONS,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x (k + 1)), first column all ones."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def k(self) -> int:
        """Number of predictors, intercept excluded."""
        return self._k

    @property
    def p(self) -> int:
        """Number of coefficients, intercept included."""
        return self._k + 1

    @property
    def names(self) -> tuple[str, ...]:
        """Predictor names, used in the equation string."""
        return self._names

    @property
    def method(self) -> str:
        return self._method

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute X'X."""
        return self._X.T @ self._X

    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y
