"""
User-facing ANOVA solution type.

AnovaSolution wraps a Result[AnovaParams] and provides convenient
accessors, per-term decisions at the design's alpha, and a formatted
ANOVA table.
"""

from dataclasses import dataclass
from typing import Any

from pystatengine.core.exceptions import InputError
from pystatengine.core.result import Result
from pystatengine.anova._common import AnovaParams, AnovaTableRow
from pystatengine.hypothesis._common import decision_text


@dataclass
class AnovaSolution:
    """
    User-facing result for one-way and two-way ANOVA.

    Produced by anova_oneway(), anova_twoway() and anova().

    `statistic`, `p_value`, `degrees_of_freedom`, `significant` and
    `decision` describe the first term of the table (the only one in a
    one-way design). Use `row(term)`, `is_significant(term)` and
    `decision_for(term)` for the other terms of a two-way design.
    """
    _result: Result[AnovaParams]

    @property
    def table(self) -> tuple[AnovaTableRow, ...]:
        """ANOVA table (rows: term, df, SS, MS, F, p)."""
        return self._result.params.table

    @property
    def terms(self) -> tuple[str, ...]:
        """Tested terms, without Residuals."""
        return tuple(r.term for r in self.table if r.term != 'Residuals')

    def row(self, term: str) -> AnovaTableRow:
        """Table row for a term name (e.g. 'group', 'A:B', 'Residuals')."""
        for r in self.table:
            if r.term == term:
                return r
        raise InputError(f"unknown term {term!r}, expected one of {self.terms}")

    def is_significant(self, term: str) -> bool:
        r = self.row(term)
        if r.p_value is None:
            raise InputError(f"{term!r} has no F test")
        return r.p_value < self.alpha

    def decision_for(self, term: str) -> str:
        r = self.row(term)
        if r.p_value is None:
            raise InputError(f"{term!r} has no F test")
        return decision_text(r.p_value, self.alpha)

    # --- Primary effect ---

    @property
    def statistic(self) -> float:
        """F statistic of the first term."""
        return self.table[0].f_value

    @property
    def p_value(self) -> float:
        return self.table[0].p_value

    @property
    def degrees_of_freedom(self) -> tuple[int, int]:
        """(df of the first term, residual df)."""
        return (self.table[0].df, self.residual_df)

    @property
    def significant(self) -> bool:
        return self.is_significant(self.table[0].term)

    @property
    def decision(self) -> str:
        return self.decision_for(self.table[0].term)

    # --- Descriptives ---

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def design_type(self) -> str:
        return self._result.params.design_type

    @property
    def n_obs(self) -> int:
        return self._result.params.n_obs

    @property
    def factor_names(self) -> tuple[str, ...]:
        return self._result.params.factor_names

    @property
    def grand_mean(self) -> float:
        return self._result.params.grand_mean

    @property
    def group_means(self) -> dict[str, dict[str, float]]:
        return self._result.params.group_means

    @property
    def cell_means(self) -> dict[str, float] | None:
        return self._result.params.cell_means

    @property
    def residual_df(self) -> int:
        return self._result.params.residual_df

    @property
    def residual_ss(self) -> float:
        return self._result.params.residual_ss

    @property
    def residual_ms(self) -> float:
        return self._result.params.residual_ms

    @property
    def eta_squared(self) -> dict[str, float]:
        return self._result.params.eta_squared

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
        """Generate the ANOVA summary table."""
        title = "One-way" if self.design_type == 'oneway' else "Two-way"
        lines = [
            f"{title} Analysis of Variance Table",
            "=" * 72,
            f"Observations: {self.n_obs}",
            "",
            f"{'Source':<20} {'Df':>6} {'Sum Sq':>14} {'Mean Sq':>14} {'F value':>10} {'Pr(>F)':>12}",
            "-" * 72,
        ]

        for row in self.table:
            if row.f_value is not None:
                sig = _significance_stars(row.p_value)
                lines.append(
                    f"{row.term:<20} {row.df:>6} {row.sum_sq:>14.4f} "
                    f"{row.mean_sq:>14.4f} {row.f_value:>10.4f} "
                    f"{row.p_value:>12.4e} {sig}"
                )
            else:
                lines.append(
                    f"{row.term:<20} {row.df:>6} {row.sum_sq:>14.4f} "
                    f"{row.mean_sq:>14.4f}"
                )

        lines.append("-" * 72)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")

        lines.append("")
        lines.append(f"Decisions at alpha = {self.alpha:g}:")
        for term in self.terms:
            lines.append(f"  {term}: {self.decision_for(term)}")

        if self.eta_squared:
            lines.append("")
            lines.append("Effect sizes:")
            for term, eta in self.eta_squared.items():
                lines.append(f"  {term}: eta^2 = {eta:.4f}")

        for w in self.warnings:
            lines.append(f"warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"AnovaSolution(type={self.design_type!r}, n={self.n_obs}, "
            f"terms={list(self.terms)})"
        )


def _significance_stars(p: float | None) -> str:
    if p is None:
        return ""
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    if p < 0.1:
        return "."
    return ""
