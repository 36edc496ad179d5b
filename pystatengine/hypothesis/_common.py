"""
Common types for hypothesis testing.

Defines HTestParams, the payload every hypothesis test returns, and the
tail-probability helper shared by all CDF-based p-values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from pystatengine.core.constants import (
    TWO_TAILED,
    GREATER,
    DECISION_REJECT,
    DECISION_FAIL_TO_REJECT,
)


@dataclass(frozen=True)
class HTestParams:
    """
    Parameter payload for hypothesis tests.

    Every hypothesis test returns this same structure; test-specific
    extras (rank sums, tie counts, observed tables) go in `extras`.

    Attributes
    ----------
    statistic : float
        Test statistic value.
    statistic_name : str
        Name of the statistic ("t", "z", "S", "T", "U", "D", "X-squared").
    parameter : dict or None
        Distribution parameters, e.g. {"df": 7}. None when the reference
        distribution has none (z, sign, rank tests, KS).
    p_value : float
        p-value of the test, in [0, 1].
    alpha : float
        Significance level the decision is made at.
    alternative : str
        "two-tailed", "greater" or "less".
    method : str
        Human-readable method name, e.g. "One Sample t-test".
    data_name : str
        Description of the data, e.g. "x and y".
    estimate : dict or None
        Point estimate(s), e.g. {"mean of x": 5.0}.
    null_value : dict or None
        Hypothesised value under H0, e.g. {"mean": 5.0}.
    extras : dict or None
        Test-specific additional outputs.
    """
    statistic: float
    statistic_name: str
    parameter: dict[str, float] | None
    p_value: float
    alpha: float
    alternative: str
    method: str
    data_name: str
    estimate: dict[str, float] | None = None
    null_value: dict[str, float] | None = None
    extras: dict[str, Any] | None = None

    @property
    def significant(self) -> bool:
        return self.p_value < self.alpha


def tail_p_value(
    statistic: float,
    cdf: Callable[[float], float],
    alternative: str,
) -> float:
    """
    p-value of a statistic under a symmetric reference distribution.

        two-tailed: 2 * (1 - CDF(|stat|))
        greater:    1 - CDF(stat)
        less:       CDF(stat)

    `alternative` is assumed validated. Clamped to [0, 1].
    """
    if alternative == TWO_TAILED:
        p = 2.0 * (1.0 - cdf(abs(statistic)))
    elif alternative == GREATER:
        p = 1.0 - cdf(statistic)
    else:  # less
        p = cdf(statistic)
    return min(max(float(p), 0.0), 1.0)


def decision_text(p_value: float, alpha: float) -> str:
    """Reject iff p < alpha."""
    return DECISION_REJECT if p_value < alpha else DECISION_FAIL_TO_REJECT
