"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pystatengine.core.constants import EQUATION_DECIMALS
from pystatengine.core.result import Result

if TYPE_CHECKING:
    from pystatengine.regression.design import RegressionDesign


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends. Coefficients are
    ordered intercept first, then one slope per predictor.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    df_residual: int
    coef_standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]


@dataclass
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides convenient accessors
    for all regression outputs including the equation string.
    """
    _result: Result[LinearParams]
    _design: 'RegressionDesign'

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """[intercept, slope_1, ..., slope_k]."""
        return self._result.params.coefficients

    @property
    def intercept(self) -> float:
        return float(self.coefficients[0])

    @property
    def slopes(self) -> NDArray[np.floating[Any]]:
        return self.coefficients[1:]

    @property
    def slope(self) -> float:
        """The single slope of a one-predictor fit."""
        if len(self.slopes) != 1:
            raise AttributeError(
                f"slope: fit has {len(self.slopes)} predictors, use slopes"
            )
        return float(self.slopes[0])

    @property
    def names(self) -> tuple[str, ...]:
        return self._design.names

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def coefficient_of_determination(self) -> float:
        """R^2 = 1 - SS_res / SS_tot."""
        return 1.0 - (self.rss / self.tss)

    @property
    def r_squared(self) -> float:
        return self.coefficient_of_determination

    @property
    def adjusted_r_squared(self) -> float:
        n = self._design.n
        return 1.0 - (1.0 - self.r_squared) * (n - 1) / self.df_residual

    @property
    def standard_error(self) -> float:
        """Residual standard error sqrt(SS_res / (n - k - 1))."""
        return float(np.sqrt(self.rss / self.df_residual))

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """Standard errors of the coefficients, sqrt(diag(s^2 (X'X)^-1))."""
        return self._result.params.coef_standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        """t-statistics for coefficients."""
        return self._result.params.t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-tailed p-values of the coefficient t-statistics."""
        return self._result.params.p_values

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def equation(self) -> str:
        """
        Fitted equation with 4 decimals.

        One predictor:   "y = 2.0000x + 0.0000"
        Several:         "y = 1.0000 + 2.0000*x1 - 0.5000*x2"
        """
        b0 = self.intercept
        if self._design.method == 'simple':
            sign, mag = _signed(b0)
            return f"y = {_fmt(self.slope)}x {sign} {mag}"

        parts = [f"y = {_fmt(b0)}"]
        for name, b in zip(self.names, self.slopes):
            sign, mag = _signed(float(b))
            parts.append(f"{sign} {mag}*{name}")
        return " ".join(parts)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate regression summary output."""
        lines = [
            "Linear Regression Results",
            "=" * 60,
            f"Equation: {self.equation}",
            f"Observations: {self._design.n}",
            f"Predictors: {self._design.k}",
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"Residual Std. Error: {self.standard_error:.6f} on {self.df_residual} DF",
            "",
            "Coefficients:",
            "-" * 60,
            f"{'Term':<12} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>|t|)':>10}",
            "-" * 60,
        ]

        terms = ('(Intercept)',) + self.names
        for term, coef, se, t, p in zip(
            terms, self.coefficients, self.standard_errors,
            self.t_statistics, self.p_values,
        ):
            se_str = f"{se:12.6f}" if not np.isnan(se) else "          NA"
            t_str = f"{t:10.3f}" if not np.isnan(t) else "        NA"
            p_str = f"{p:10.4g}" if not np.isnan(p) else "        NA"
            lines.append(f"{term:<12} {coef:14.6f} {se_str} {t_str} {p_str}")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self._design.n}, k={self._design.k}, "
            f"r_squared={self.r_squared:.4f})"
        )


def _fmt(value: float) -> str:
    return f"{value:.{EQUATION_DECIMALS}f}"


def _signed(value: float) -> tuple[str, str]:
    """('+' or '-', magnitude) for joining terms; values that round to zero get '+'."""
    mag = _fmt(abs(value))
    if value < 0 and float(mag) != 0.0:
        return '-', mag
    return '+', mag
