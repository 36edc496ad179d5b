"""
Pearson chi-square tests.

Supports:
- Goodness-of-fit (observed category counts vs expected proportions,
  uniform by default)
- Independence (contingency table of two categorical columns)

p = 1 - chi-square CDF(X^2, df) in both cases.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
import numpy as np

from pystatengine.core.constants import TWO_TAILED, SMALL_EXPECTED_COUNT
from pystatengine.hypothesis._common import HTestParams

if TYPE_CHECKING:
    from pystatengine.core.protocols import Distributions
    from pystatengine.hypothesis.design import HypothesisDesign

logger = logging.getLogger(__name__)


def chisq_independence(
    design: HypothesisDesign, dist: Distributions,
) -> tuple[HTestParams, list[str]]:
    """Chi-square test of independence for a contingency table."""
    table = design.table.copy()
    warnings_list: list[str] = []

    nrow, ncol = table.shape
    row_sums = table.sum(axis=1)
    col_sums = table.sum(axis=0)
    total = table.sum()

    # Expected counts: E[i,j] = row_sum[i] * col_sum[j] / total
    expected = np.outer(row_sums, col_sums) / total

    # Empty rows/columns give E = 0 cells, which contribute nothing
    mask = expected > 0
    chisq = float(np.sum((table[mask] - expected[mask]) ** 2 / expected[mask]))
    df = float((nrow - 1) * (ncol - 1))

    if np.any(expected[mask] < SMALL_EXPECTED_COUNT):
        warnings_list.append("Chi-squared approximation may be incorrect")

    p_value = _upper_tail(chisq, df, dist)

    return HTestParams(
        statistic=chisq,
        statistic_name="X-squared",
        parameter={"df": df},
        p_value=p_value,
        alpha=design.alpha,
        alternative=TWO_TAILED,
        method="Pearson's Chi-squared test of independence",
        data_name=design.data_name,
        extras={
            "observed": table,
            "expected": expected,
            "row totals": row_sums,
            "column totals": col_sums,
            "grand total": float(total),
            "row levels": design.row_levels,
            "column levels": design.col_levels,
        },
    ), warnings_list


def chisq_gof(
    design: HypothesisDesign, dist: Distributions,
) -> tuple[HTestParams, list[str]]:
    """Chi-square goodness-of-fit test."""
    observed = design.table
    p = design.expected_p
    warnings_list: list[str] = []

    n = float(np.sum(observed))
    k = len(observed)

    if p is None:
        p = np.full(k, 1.0 / k)
        method = "Chi-squared goodness-of-fit test (uniform expected frequencies)"
    else:
        method = "Chi-squared goodness-of-fit test for given probabilities"

    expected = n * p
    mask = expected > 0
    if np.any(observed[~mask] > 0):
        # Observed count where the null says impossible
        logger.debug("goodness-of-fit: observed count in a zero-probability category")
        chisq = float('inf')
    else:
        chisq = float(np.sum((observed[mask] - expected[mask]) ** 2 / expected[mask]))
    df = float(k - 1)

    if np.any(expected[mask] < SMALL_EXPECTED_COUNT):
        warnings_list.append("Chi-squared approximation may be incorrect")

    p_value = 0.0 if np.isinf(chisq) else _upper_tail(chisq, df, dist)

    return HTestParams(
        statistic=chisq,
        statistic_name="X-squared",
        parameter={"df": df},
        p_value=p_value,
        alpha=design.alpha,
        alternative=TWO_TAILED,
        method=method,
        data_name=design.data_name,
        extras={
            "observed": observed.copy(),
            "expected": expected,
            "levels": design.row_levels,
        },
    ), warnings_list


def _upper_tail(chisq: float, df: float, dist: Distributions) -> float:
    return float(min(max(1.0 - dist.chi_square_cdf(chisq, df), 0.0), 1.0))
