"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


class StubDistributions:
    """
    Distributions stand-in returning fixed CDF values.

    Lets tests check that p-values are derived from the injected
    capability rather than from scipy.
    """

    def __init__(self, value: float = 0.975):
        self.value = value
        self.calls: list[str] = []

    def normal_cdf(self, x, mean=0.0, sd=1.0):
        self.calls.append('normal_cdf')
        return self.value

    def student_t_cdf(self, t, df):
        self.calls.append('student_t_cdf')
        return self.value

    def f_cdf(self, f, df1, df2):
        self.calls.append('f_cdf')
        return self.value

    def chi_square_cdf(self, x, df):
        self.calls.append('chi_square_cdf')
        return self.value


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def stub_distributions():
    """Distributions whose every CDF returns 0.975."""
    return StubDistributions(0.975)


@pytest.fixture
def simple_regression_data(rng):
    """Regression dataset with three predictors and no intercept term."""
    n, p = 100, 3
    X = rng.standard_normal((n, p))
    beta_true = np.array([1.0, -2.0, 0.5])
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (should fail)."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2  # Perfect collinearity
    X = np.column_stack([x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y
