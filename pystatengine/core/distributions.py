"""
Default Distributions implementation backed by scipy.stats.

Backends take a `Distributions` at construction time; when none is
given they use the module-level DEFAULT_DISTRIBUTIONS instance defined
here.
"""

from scipy import stats as sp_stats

from pystatengine.core.protocols import Distributions


class ScipyDistributions:
    """CDFs from scipy.stats. Stateless."""

    def normal_cdf(self, x: float, mean: float = 0.0, sd: float = 1.0) -> float:
        return float(sp_stats.norm.cdf(x, loc=mean, scale=sd))

    def student_t_cdf(self, t: float, df: float) -> float:
        return float(sp_stats.t.cdf(t, df))

    def f_cdf(self, f: float, df1: float, df2: float) -> float:
        return float(sp_stats.f.cdf(f, df1, df2))

    def chi_square_cdf(self, x: float, df: float) -> float:
        return float(sp_stats.chi2.cdf(x, df))

    def __repr__(self) -> str:
        return "ScipyDistributions()"


DEFAULT_DISTRIBUTIONS = ScipyDistributions()


def resolve_distributions(distributions: Distributions | None) -> Distributions:
    """Return `distributions`, or the scipy default when None."""
    if distributions is None:
        return DEFAULT_DISTRIBUTIONS
    if not isinstance(distributions, Distributions):
        raise TypeError(
            f"distributions: {type(distributions).__name__} does not implement "
            f"normal_cdf, student_t_cdf, f_cdf and chi_square_cdf"
        )
    return distributions
