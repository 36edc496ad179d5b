"""
Solver dispatch for hypothesis tests.

Provides one function per test: t_test_one_sample(), t_test_paired(),
t_test_independent(), z_test_one_sample(), z_test_two_sample(),
sign_test(), wilcoxon_signed_rank_test(), mann_whitney_u_test(),
ks_normality_test(), chisq_gof(), chisq_independence(),
chisq_independence_table() and the column dispatcher chisq_test().

Every function accepts either raw data or a prebuilt HypothesisDesign,
and a `distributions` object supplying the reference CDFs.
"""

from __future__ import annotations

from typing import Any, Hashable, Sequence
from numpy.typing import ArrayLike

from pystatengine.core.constants import (
    DEFAULT_ALPHA,
    TWO_TAILED,
    GOODNESS_OF_FIT,
    INDEPENDENCE,
    VALID_CHISQ_TEST_TYPES,
)
from pystatengine.core.exceptions import DomainError, InputError
from pystatengine.core.protocols import Distributions
from pystatengine.hypothesis.design import HypothesisDesign
from pystatengine.hypothesis.solution import HTestSolution
from pystatengine.hypothesis.backends.cpu import CPUHypothesisBackend


def _solve(
    design: HypothesisDesign, distributions: Distributions | None,
) -> HTestSolution:
    be = CPUHypothesisBackend(distributions)
    result = be.solve(design)
    return HTestSolution(_result=result, _design=design)


def _expect_type(design: HypothesisDesign, *test_types: str) -> HypothesisDesign:
    if design.test_type not in test_types:
        raise DomainError(
            f"design: expected a design for {' or '.join(test_types)}, "
            f"got {design.test_type!r}",
            option='design',
            value=design.test_type,
        )
    return design


# --- Parametric ---

def t_test_one_sample(
    x: ArrayLike | HypothesisDesign,
    *,
    mu: float = 0.0,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = TWO_TAILED,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    One-sample Student t-test of H0: mean(x) = mu.

    Parameters
    ----------
    x : array-like or HypothesisDesign
        1D numeric sample, at least 2 observations.
    mu : float
        Hypothesised mean. Default 0.
    alpha : float
        Significance level in (0, 1). Default 0.05.
    alternative : str
        "two-tailed" (default), "greater" or "less".
    distributions : Distributions or None
        Source of the t CDF. Default scipy.stats.

    Returns
    -------
    HTestSolution
        statistic t, degrees_of_freedom n - 1, p_value, decision.
    """
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "t_one_sample")
    else:
        design = HypothesisDesign.for_t_test(
            x, mu=mu, alpha=alpha, alternative=alternative,
        )
    return _solve(design, distributions)


def t_test_paired(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    mu: float = 0.0,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = TWO_TAILED,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    Paired t-test: one-sample t-test on the differences x[i] - y[i].

    x and y must have the same length (DimensionError otherwise).
    """
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "t_paired")
    else:
        design = HypothesisDesign.for_t_test(
            x, y, mu=mu, paired=True, alpha=alpha, alternative=alternative,
        )
    return _solve(design, distributions)


def t_test_independent(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    mu: float = 0.0,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = TWO_TAILED,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    Two-sample t-test with pooled variance, df = n1 + n2 - 2.

    `mu` is the hypothesised difference mean(x) - mean(y).
    """
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "t_independent")
    else:
        if y is None:
            raise InputError("y: two-sample t-test requires a second sample")
        design = HypothesisDesign.for_t_test(
            x, y, mu=mu, alpha=alpha, alternative=alternative,
        )
    return _solve(design, distributions)


def z_test_one_sample(
    x: ArrayLike | HypothesisDesign,
    sigma: float | None = None,
    *,
    mu: float = 0.0,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = TWO_TAILED,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    One-sample z-test with known population standard deviation `sigma`.

    z = (mean(x) - mu) / (sigma / sqrt(n)). sigma must be positive.
    """
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "z_one_sample")
    else:
        design = HypothesisDesign.for_z_test(
            x, sigma_x=sigma, mu=mu, alpha=alpha, alternative=alternative,
        )
    return _solve(design, distributions)


def z_test_two_sample(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    sigma_x: float | None = None,
    sigma_y: float | None = None,
    mu: float = 0.0,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = TWO_TAILED,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    Two-sample z-test with known population standard deviations.

    z = (mean(x) - mean(y) - mu) / sqrt(sigma_x^2/n1 + sigma_y^2/n2),
    where mu is the hypothesised difference of means.
    """
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "z_two_sample")
    else:
        if y is None:
            raise InputError("y: two-sample z-test requires a second sample")
        design = HypothesisDesign.for_z_test(
            x, y, sigma_x=sigma_x, sigma_y=sigma_y, mu=mu,
            alpha=alpha, alternative=alternative,
        )
    return _solve(design, distributions)


# --- Nonparametric ---

def sign_test(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    alpha: float = DEFAULT_ALPHA,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    Paired sign test with an exact binomial p-value.

    The solution exposes `positive`, `negative`, `ties` and the effective
    sample size in extras['n'].
    """
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "sign_test")
    else:
        design = HypothesisDesign.for_sign_test(x, y, alpha=alpha)
    return _solve(design, distributions)


def wilcoxon_signed_rank_test(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    alpha: float = DEFAULT_ALPHA,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    Wilcoxon signed-rank test on paired samples.

    Exact for at most 20 nonzero differences, normal approximation with
    continuity correction above that.
    """
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "wilcoxon_signed_rank")
    else:
        design = HypothesisDesign.for_signed_rank_test(x, y, alpha=alpha)
    return _solve(design, distributions)


def mann_whitney_u_test(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    alpha: float = DEFAULT_ALPHA,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """Mann-Whitney U test on two independent samples."""
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "mann_whitney_u")
    else:
        design = HypothesisDesign.for_mann_whitney(x, y, alpha=alpha)
    return _solve(design, distributions)


def ks_normality_test(
    x: ArrayLike | HypothesisDesign,
    *,
    alpha: float = DEFAULT_ALPHA,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    Kolmogorov-Smirnov test of x against a normal with the sample's
    mean and standard deviation.

    `is_normal` compares D with the 1.36 / sqrt(n) critical value;
    `p_value` comes from the asymptotic Kolmogorov series.
    """
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "ks_normality")
    else:
        design = HypothesisDesign.for_ks_normality(x, alpha=alpha)
    return _solve(design, distributions)


# --- Chi-square ---

def chisq_gof(
    values: Sequence[Any] | HypothesisDesign,
    *,
    alpha: float = DEFAULT_ALPHA,
    expected_p: ArrayLike | None = None,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    Chi-square goodness-of-fit test on one categorical column.

    Parameters
    ----------
    values : sequence or HypothesisDesign
        Category labels; missing entries are dropped.
    alpha : float
        Significance level. Default 0.05.
    expected_p : array-like or None
        Expected proportions per category, in level order (first
        appearance, or ascending when all labels are numeric). None means
        every category is equally likely.
    distributions : Distributions or None
        Source of the chi-square CDF.
    """
    if isinstance(values, HypothesisDesign):
        design = _expect_type(values, "chisq_gof")
    else:
        design = HypothesisDesign.for_chisq_gof(
            values, expected_p=expected_p, alpha=alpha,
        )
    return _solve(design, distributions)


def chisq_independence(
    x: Sequence[Any] | HypothesisDesign,
    y: Sequence[Any] | None = None,
    *,
    alpha: float = DEFAULT_ALPHA,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """Chi-square test of independence between two categorical columns."""
    if isinstance(x, HypothesisDesign):
        design = _expect_type(x, "chisq_independence")
    else:
        if y is None:
            raise InputError("y: independence test requires a second column")
        design = HypothesisDesign.for_chisq_independence(x, y, alpha=alpha)
    return _solve(design, distributions)


def chisq_independence_table(
    table: ArrayLike,
    *,
    row_levels: Sequence[Hashable] | None = None,
    col_levels: Sequence[Hashable] | None = None,
    alpha: float = DEFAULT_ALPHA,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """Chi-square test of independence on a ready r x c table of counts."""
    design = HypothesisDesign.for_chisq_table(
        table, row_levels=row_levels, col_levels=col_levels, alpha=alpha,
    )
    return _solve(design, distributions)


def chisq_test(
    *columns: Sequence[Any],
    test_type: str,
    alpha: float = DEFAULT_ALPHA,
    distributions: Distributions | None = None,
) -> HTestSolution:
    """
    Chi-square test selected by name.

    "goodness-of-fit" takes exactly one column of categories,
    "independence" exactly two. Anything else raises DomainError.
    """
    if test_type not in VALID_CHISQ_TEST_TYPES:
        raise DomainError(
            f"test_type must be one of {VALID_CHISQ_TEST_TYPES}, got {test_type!r}",
            option='test_type',
            value=test_type,
        )
    if test_type == GOODNESS_OF_FIT:
        if len(columns) != 1:
            raise DomainError(
                f"{GOODNESS_OF_FIT} requires exactly 1 column, got {len(columns)}",
                option='columns',
                value=len(columns),
            )
        return chisq_gof(columns[0], alpha=alpha, distributions=distributions)

    # INDEPENDENCE
    if len(columns) != 2:
        raise DomainError(
            f"{INDEPENDENCE} requires exactly 2 columns, got {len(columns)}",
            option='columns',
            value=len(columns),
        )
    return chisq_independence(
        columns[0], columns[1], alpha=alpha, distributions=distributions,
    )
