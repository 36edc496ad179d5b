"""
Tests for the z-tests with known population standard deviation.
"""

import numpy as np
import pytest
from scipy import stats

from pystatengine.core.exceptions import InputError
from pystatengine.hypothesis import z_test_one_sample, z_test_two_sample


class TestOneSampleZTest:

    def test_mean_equals_mu(self):
        result = z_test_one_sample([1, 2, 3, 4, 5], sigma=1.0, mu=3.0)
        assert result.statistic == pytest.approx(0.0, abs=1e-15)
        assert result.p_value == pytest.approx(1.0)
        assert result.statistic_name == "z"
        assert result.degrees_of_freedom is None
        assert result.parameter is None

    def test_statistic(self):
        # z = 3 / (2 / sqrt(5))
        result = z_test_one_sample([1, 2, 3, 4, 5], sigma=2.0)
        z = 3.0 * np.sqrt(5.0) / 2.0
        assert result.statistic == pytest.approx(z)
        assert result.p_value == pytest.approx(2.0 * stats.norm.sf(z))
        assert result.extras["standard error"] == pytest.approx(2.0 / np.sqrt(5.0))

    def test_one_sided(self):
        result = z_test_one_sample([1, 2, 3, 4, 5], sigma=2.0, alternative="less")
        assert result.p_value == pytest.approx(stats.norm.cdf(3.0 * np.sqrt(5.0) / 2.0))

    def test_single_observation_allowed(self):
        result = z_test_one_sample([2.0], sigma=1.0)
        assert result.statistic == pytest.approx(2.0)

    @pytest.mark.parametrize("sigma", [0.0, -1.0, np.nan])
    def test_invalid_sigma(self, sigma):
        with pytest.raises(InputError, match="sigma"):
            z_test_one_sample([1, 2, 3], sigma=sigma)

    def test_injected_distributions(self, stub_distributions):
        z_test_one_sample([1, 2, 3], sigma=1.0, distributions=stub_distributions)
        assert stub_distributions.calls == ["normal_cdf"]


class TestTwoSampleZTest:

    def test_statistic(self):
        result = z_test_two_sample(
            [1, 2, 3, 4, 5], [2, 3, 4, 5, 6], sigma_x=1.0, sigma_y=1.0,
        )
        z = -1.0 / np.sqrt(0.4)
        assert result.statistic == pytest.approx(z)
        assert result.p_value == pytest.approx(2.0 * stats.norm.sf(abs(z)))
        assert result.method == "Two Sample z-test"

    def test_hypothesised_difference(self):
        result = z_test_two_sample(
            [1, 2, 3, 4, 5], [2, 3, 4, 5, 6], sigma_x=1.0, sigma_y=1.0, mu=-1.0,
        )
        assert result.statistic == pytest.approx(0.0, abs=1e-12)

    def test_missing_sigma_y(self):
        with pytest.raises(InputError, match="sigma_y"):
            z_test_two_sample([1, 2], [3, 4], sigma_x=1.0)

    def test_missing_y(self):
        with pytest.raises(InputError):
            z_test_two_sample([1, 2], sigma_x=1.0, sigma_y=1.0)
