"""
Hypothesis test solution types.

HTestSolution wraps Result[HTestParams] and adds the decision at the
design's significance level, plus a printable report via summary().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
from numpy.typing import NDArray

from pystatengine.core.constants import TWO_TAILED, GREATER, LESS
from pystatengine.core.result import Result
from pystatengine.hypothesis._common import HTestParams, decision_text

if TYPE_CHECKING:
    from pystatengine.hypothesis.design import HypothesisDesign


@dataclass
class HTestSolution:
    """
    User-facing hypothesis test results.

    Wraps Result[HTestParams]. The common fields (statistic, p-value,
    degrees of freedom, decision) are properties; test-specific outputs
    are reachable through `extras` or the named accessors below.
    """
    _result: Result[HTestParams]
    _design: 'HypothesisDesign | None'

    # --- Standard fields ---

    @property
    def statistic(self) -> float:
        """Test statistic value."""
        return self._result.params.statistic

    @property
    def statistic_name(self) -> str:
        """Name of the test statistic (e.g. 't', 'X-squared')."""
        return self._result.params.statistic_name

    @property
    def parameter(self) -> dict[str, float] | None:
        """Distribution parameters (e.g. {'df': 9})."""
        return self._result.params.parameter

    @property
    def degrees_of_freedom(self) -> float | None:
        """Degrees of freedom, or None for tests without them."""
        p = self._result.params.parameter
        return p.get('df') if p else None

    @property
    def p_value(self) -> float:
        """p-value of the test."""
        return self._result.params.p_value

    @property
    def alpha(self) -> float:
        """Significance level."""
        return self._result.params.alpha

    @property
    def significant(self) -> bool:
        """True iff p_value < alpha."""
        return self._result.params.significant

    @property
    def decision(self) -> str:
        """'Reject the null hypothesis' or 'Fail to reject the null hypothesis'."""
        p = self._result.params
        return decision_text(p.p_value, p.alpha)

    @property
    def estimate(self) -> dict[str, float] | None:
        """Point estimate(s)."""
        return self._result.params.estimate

    @property
    def null_value(self) -> dict[str, float] | None:
        """Hypothesized value under H0."""
        return self._result.params.null_value

    @property
    def alternative(self) -> str:
        """Alternative hypothesis direction."""
        return self._result.params.alternative

    @property
    def method(self) -> str:
        """Human-readable method name."""
        return self._result.params.method

    @property
    def data_name(self) -> str:
        """Description of the data."""
        return self._result.params.data_name

    # --- Test-specific extras ---

    @property
    def extras(self) -> dict[str, Any]:
        """Test-specific additional outputs."""
        return self._result.params.extras or {}

    def _extra(self, key: str) -> Any:
        return self.extras.get(key)

    @property
    def positive(self) -> int | None:
        """For sign_test: number of positive differences."""
        return self._extra('positive')

    @property
    def negative(self) -> int | None:
        """For sign_test: number of negative differences."""
        return self._extra('negative')

    @property
    def ties(self) -> int | None:
        """For sign_test: number of zero differences."""
        return self._extra('ties')

    @property
    def positive_rank_sum(self) -> float | None:
        """For the signed-rank test: sum of ranks of positive differences."""
        return self._extra('positive rank sum')

    @property
    def negative_rank_sum(self) -> float | None:
        """For the signed-rank test: sum of ranks of negative differences."""
        return self._extra('negative rank sum')

    @property
    def u1(self) -> float | None:
        """For Mann-Whitney: U of the first sample."""
        return self._extra('U1')

    @property
    def u2(self) -> float | None:
        """For Mann-Whitney: U of the second sample."""
        return self._extra('U2')

    @property
    def critical_value(self) -> float | None:
        """For the KS test: 1.36 / sqrt(n)."""
        return self._extra('critical value')

    @property
    def is_normal(self) -> bool | None:
        """For the KS test: D <= critical value."""
        return self._extra('is normal')

    @property
    def observed(self) -> NDArray | None:
        """For chi-square tests: observed counts."""
        return self._extra('observed')

    @property
    def expected(self) -> NDArray | None:
        """For chi-square tests: expected counts under H0."""
        return self._extra('expected')

    # --- Metadata ---

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

    # --- Formatting ---

    def summary(self) -> str:
        """
        Format a printable report.

        Produces output like:
            One Sample t-test

        data:  x
        t = 2.2345, df = 9, p-value = 0.05231
        alternative hypothesis: true mean is not equal to 0
        sample estimates:
             mean of x
              1.234568
        decision at alpha = 0.05: Fail to reject the null hypothesis
        """
        p = self._result.params
        lines = []

        lines.append(f"\t{p.method}")
        lines.append("")
        lines.append(f"data:  {p.data_name}")

        parts = [f"{p.statistic_name} = {p.statistic:.5g}"]
        if p.parameter is not None:
            for name, val in p.parameter.items():
                parts.append(f"{name} = {val:.5g}")
        parts.append(f"p-value = {_format_pvalue(p.p_value)}")
        lines.append(", ".join(parts))

        if p.null_value:
            nv_name, nv_val = next(iter(p.null_value.items()))
            relation = {
                TWO_TAILED: "is not equal to",
                GREATER: "is greater than",
                LESS: "is less than",
            }[p.alternative]
            lines.append(
                f"alternative hypothesis: true {nv_name} {relation} {nv_val:g}"
            )

        if p.estimate:
            lines.append("sample estimates:")
            names = list(p.estimate.keys())
            vals = list(p.estimate.values())
            lines.append(" ".join(f"{n:>18s}" for n in names))
            lines.append(" ".join(f"{v:18.7g}" for v in vals))

        lines.append(f"decision at alpha = {p.alpha:g}: {self.decision}")
        for w in self._result.warnings:
            lines.append(f"warning: {w}")

        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"HTestSolution(method={p.method!r}, "
            f"{p.statistic_name}={p.statistic:.4g}, "
            f"p_value={p.p_value:.4g})"
        )


def _format_pvalue(p: float) -> str:
    """Format p-value for display."""
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"

