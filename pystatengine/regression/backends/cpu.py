"""
CPU reference backend for linear regression.

Two routes:
    simple            closed-form sums for one predictor
    normal_equations  beta = (X'X)^-1 X'y for k predictors

Both produce the same LinearParams payload, including coefficient
standard errors and t-tests against the Student t distribution.
"""

from __future__ import annotations

import logging
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pystatengine.core.compute.timing import Timer
from pystatengine.core.distributions import resolve_distributions
from pystatengine.core.exceptions import ComputationError, SingularMatrixError
from pystatengine.core.protocols import Distributions
from pystatengine.core.result import Result
from pystatengine.regression.design import RegressionDesign, SIMPLE
from pystatengine.regression.solution import LinearParams

logger = logging.getLogger(__name__)


class CPURegressionBackend:
    """
    CPU backend for ordinary least squares.

    Implements the Backend protocol for RegressionDesign -> LinearParams.
    """

    def __init__(self, distributions: Distributions | None = None):
        self._dist = resolve_distributions(distributions)

    @property
    def name(self) -> str:
        return 'cpu_ols'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Fit OLS.

        Raises:
            ComputationError: If all x (simple) or all y values are
                identical, or if any result is non-finite
            SingularMatrixError: If X'X is rank-deficient
        """
        timer = Timer()
        timer.start()

        X = design.X
        y = design.y
        n, p = X.shape
        logger.debug("regression via %s: n=%d, p=%d", design.method, n, p)

        if np.all(y == y[0]):
            raise ComputationError(
                "all y values are identical: coefficient of determination undefined"
            )

        with timer.section('solve'):
            if design.method == SIMPLE:
                coefficients = _simple_coefficients(X[:, 1], y)
            else:
                coefficients = _normal_equation_coefficients(design)

        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values

        with timer.section('statistics'):
            rss = float(residuals @ residuals)
            tss = float(np.sum((y - np.mean(y)) ** 2))
            df_residual = n - p
            se, t_stats, p_values = _coefficient_tests(
                design, coefficients, rss, df_residual, self._dist,
            )

        timer.stop()

        if not (np.all(np.isfinite(coefficients)) and np.isfinite(rss)
                and np.isfinite(tss)):
            raise ComputationError(
                f"non-finite regression result: coefficients={coefficients}, "
                f"rss={rss}, tss={tss}"
            )

        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            tss=tss,
            df_residual=df_residual,
            coef_standard_errors=se,
            t_statistics=t_stats,
            p_values=p_values,
        )

        info: dict[str, Any] = {
            'method': design.method,
            'rank': p,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


def _simple_coefficients(
    x: NDArray[np.floating[Any]], y: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    m = (n Sxy - Sx Sy) / (n Sxx - Sx^2),  b = (Sy - m Sx) / n
    """
    if np.all(x == x[0]):
        raise ComputationError("cannot calculate slope: all x values are identical")

    n = len(x)
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_x2 = float(np.sum(x * x))

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0.0:
        raise ComputationError("cannot calculate slope: x has no spread")
    m = (n * sum_xy - sum_x * sum_y) / denominator
    b = (sum_y - m * sum_x) / n
    return np.array([b, m], dtype=np.float64)


def _normal_equation_coefficients(
    design: RegressionDesign,
) -> NDArray[np.floating[Any]]:
    XtX = design.XtX()
    p = design.p
    # rank(X'X) = rank(X); X is better conditioned for the SVD
    rank = int(np.linalg.matrix_rank(design.X))
    if rank < p:
        raise SingularMatrixError(
            f"X'X is singular: rank {rank} < {p} coefficients "
            f"(collinear or constant predictors)",
            matrix_name="X'X",
            rank=rank,
            expected_rank=p,
        )
    try:
        return np.linalg.solve(XtX, design.Xty())
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(
            f"X'X could not be solved: {e}",
            matrix_name="X'X",
            rank=rank,
            expected_rank=p,
        ) from e


def _coefficient_tests(
    design: RegressionDesign,
    coefficients: NDArray[np.floating[Any]],
    rss: float,
    df_residual: int,
    dist: Distributions,
) -> tuple[NDArray, NDArray, NDArray]:
    """SE(beta) = sqrt(diag(s^2 (X'X)^-1)), t = beta / SE, two-tailed p."""
    sigma_sq = rss / df_residual
    try:
        XtX_inv = np.linalg.inv(design.XtX())
    except np.linalg.LinAlgError as e:
        # Reachable on the simple route, where no rank check precedes this
        raise SingularMatrixError(
            f"X'X could not be inverted for standard errors: {e}",
            matrix_name="X'X",
        ) from e
    se = np.sqrt(sigma_sq * np.diag(XtX_inv))

    with np.errstate(divide='ignore', invalid='ignore'):
        t = coefficients / se
    # Perfect fit: SE is zero and t undefined
    t = np.where(np.isfinite(t), t, np.nan)

    p_values = np.full(len(t), np.nan)
    for j, t_j in enumerate(t):
        if not np.isnan(t_j):
            p = 2.0 * (1.0 - dist.student_t_cdf(abs(float(t_j)), df_residual))
            p_values[j] = min(max(p, 0.0), 1.0)
    return se, t, p_values
