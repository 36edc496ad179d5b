"""
Tests for the Kolmogorov-Smirnov normality test.
"""

import numpy as np
import pytest
from scipy import stats

from pystatengine.core.exceptions import ComputationError, InputError
from pystatengine.hypothesis import ks_normality_test
from pystatengine.hypothesis.backends._ks_test import kolmogorov_p_value


class TestKSNormality:

    def test_normal_quantiles_accepted(self):
        x = stats.norm.ppf((np.arange(1, 51) - 0.5) / 50)
        result = ks_normality_test(x)
        assert result.statistic_name == "D"
        assert result.is_normal is True
        assert result.statistic < result.critical_value
        assert result.p_value > 0.05

    def test_two_point_sample_rejected(self):
        x = [0.0] * 40 + [10.0] * 10
        result = ks_normality_test(x)
        assert result.statistic == pytest.approx(0.49, abs=0.01)
        assert result.is_normal is False
        assert result.significant

    def test_critical_value(self):
        result = ks_normality_test(np.linspace(-2.0, 2.0, 25))
        assert result.critical_value == pytest.approx(1.36 / 5.0)

    def test_statistic_is_max_of_sides(self, rng):
        result = ks_normality_test(rng.exponential(1.0, 60))
        assert result.statistic == max(result.extras["D+"], result.extras["D-"])

    def test_matches_scipy_statistic(self, rng):
        x = rng.normal(3.0, 2.0, 80)
        ref = stats.kstest(x, "norm", args=(np.mean(x), np.std(x, ddof=1)))
        result = ks_normality_test(x)
        assert result.statistic == pytest.approx(ref.statistic, rel=1e-10)

    def test_estimates(self):
        result = ks_normality_test([1.0, 2.0, 3.0, 4.0])
        assert result.estimate["mean"] == pytest.approx(2.5)
        assert result.estimate["sd"] == pytest.approx(np.std([1, 2, 3, 4], ddof=1))

    def test_constant_data_raises(self):
        with pytest.raises(ComputationError, match="standard deviation is zero"):
            ks_normality_test([2.0, 2.0, 2.0])

    def test_too_few_observations(self):
        with pytest.raises(InputError):
            ks_normality_test([1.0])


class TestKolmogorovPValue:

    def test_zero_statistic(self):
        assert kolmogorov_p_value(0.0, 30) == 1.0

    def test_matches_limiting_distribution(self):
        n, d = 50, 0.15
        lam = (np.sqrt(n) + 0.12 + 0.11 / np.sqrt(n)) * d
        assert kolmogorov_p_value(d, n) == pytest.approx(stats.kstwobign.sf(lam), rel=1e-6)

    def test_large_statistic_near_zero(self):
        assert kolmogorov_p_value(0.9, 100) == pytest.approx(0.0, abs=1e-12)

    def test_in_unit_interval(self):
        for d in np.linspace(0.0, 1.0, 21):
            assert 0.0 <= kolmogorov_p_value(float(d), 20) <= 1.0
