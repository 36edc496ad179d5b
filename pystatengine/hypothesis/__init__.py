"""
Hypothesis testing module.

Every test returns an HTestSolution carrying the statistic, p-value,
degrees of freedom (where defined) and the reject / fail-to-reject
decision at the requested significance level.

Public API:
    t_test_one_sample(x)              - one-sample Student t-test
    t_test_paired(x, y)               - paired t-test
    t_test_independent(x, y)          - pooled two-sample t-test
    z_test_one_sample(x, sigma)       - one-sample z-test
    z_test_two_sample(x, y, ...)      - two-sample z-test
    sign_test(x, y)                   - paired sign test
    wilcoxon_signed_rank_test(x, y)   - Wilcoxon signed-rank test
    mann_whitney_u_test(x, y)         - Mann-Whitney U test
    ks_normality_test(x)              - Kolmogorov-Smirnov normality test
    chisq_gof(values)                 - chi-square goodness-of-fit
    chisq_independence(x, y)          - chi-square test of independence
    chisq_independence_table(table)   - same, from a contingency table
    chisq_test(*columns, test_type)   - chi-square test selected by name
"""

from pystatengine.hypothesis.solvers import (
    t_test_one_sample,
    t_test_paired,
    t_test_independent,
    z_test_one_sample,
    z_test_two_sample,
    sign_test,
    wilcoxon_signed_rank_test,
    mann_whitney_u_test,
    ks_normality_test,
    chisq_gof,
    chisq_independence,
    chisq_independence_table,
    chisq_test,
)
from pystatengine.hypothesis.design import HypothesisDesign
from pystatengine.hypothesis._common import HTestParams
from pystatengine.hypothesis.solution import HTestSolution

__all__ = [
    "t_test_one_sample",
    "t_test_paired",
    "t_test_independent",
    "z_test_one_sample",
    "z_test_two_sample",
    "sign_test",
    "wilcoxon_signed_rank_test",
    "mann_whitney_u_test",
    "ks_normality_test",
    "chisq_gof",
    "chisq_independence",
    "chisq_independence_table",
    "chisq_test",
    "HypothesisDesign",
    "HTestParams",
    "HTestSolution",
]
