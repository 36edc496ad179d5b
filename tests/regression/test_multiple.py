"""
Tests for multiple linear regression, fit().

Tests the complete pipeline: design construction, normal equations
and solution properties.
"""

import numpy as np
import pytest

from pystatengine.core.exceptions import ComputationError, InputError, SingularMatrixError
from pystatengine.regression import fit, fit_simple, RegressionDesign


class TestFitBasic:

    def test_exact_plane(self):
        a = [1, 2, 3, 4, 5]
        b = [2, 1, 4, 3, 6]
        y = [2.0, 4.5, 5.0, 7.5, 8.0]
        result = fit(np.column_stack([a, b]), y, names=["a", "b"])
        np.testing.assert_allclose(result.coefficients, [1.0, 2.0, -0.5], atol=1e-10)
        assert result.r_squared == pytest.approx(1.0)
        assert result.equation == "y = 1.0000 + 2.0000*a - 0.5000*b"

    def test_default_names(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert result.names == ("x1", "x2", "x3")
        assert result.coefficients.shape == (4,)

    def test_coefficients_close_to_truth(self, simple_regression_data):
        X, y, beta_true = simple_regression_data
        result = fit(X, y)
        np.testing.assert_allclose(result.slopes, beta_true, atol=0.1)
        assert abs(result.intercept) < 0.1

    def test_matches_lstsq(self, rng):
        X = rng.standard_normal((60, 4))
        y = 0.5 + X @ [1.0, 0.0, -2.0, 3.0] + rng.standard_normal(60)
        design = np.column_stack([np.ones(60), X])
        beta, *_ = np.linalg.lstsq(design, y, rcond=None)
        result = fit(X, y)
        np.testing.assert_allclose(result.coefficients, beta, rtol=1e-8)

    def test_single_column_matches_simple(self, rng):
        x = rng.standard_normal(25)
        y = 1.0 + 3.0 * x + rng.standard_normal(25)
        multi = fit(x, y)
        simple = fit_simple(x, y)
        np.testing.assert_allclose(multi.coefficients, simple.coefficients, rtol=1e-10)
        np.testing.assert_allclose(multi.standard_errors, simple.standard_errors, rtol=1e-8)

    def test_residuals_sum_to_near_zero(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert abs(result.residuals.sum()) < 1e-10


class TestFitProperties:

    def test_standard_errors_positive(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert np.all(result.standard_errors > 0)
        assert np.all(np.isfinite(result.t_statistics))

    def test_p_values_in_zero_one(self, simple_regression_data):
        X, y, _ = simple_regression_data
        pv = fit(X, y).p_values
        assert np.all(pv >= 0.0)
        assert np.all(pv <= 1.0)

    def test_adjusted_r_squared(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        n, k = X.shape
        expected = 1.0 - (1.0 - result.r_squared) * (n - 1) / (n - k - 1)
        assert result.adjusted_r_squared == pytest.approx(expected)
        assert result.df_residual == n - k - 1

    def test_r_squared_from_sums(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert result.r_squared == pytest.approx(1.0 - result.rss / result.tss)

    def test_slope_requires_one_predictor(self, simple_regression_data):
        X, y, _ = simple_regression_data
        with pytest.raises(AttributeError, match="slopes"):
            fit(X, y).slope

    def test_summary_lists_names(self):
        X = np.column_stack([[1, 2, 3, 4, 5, 6], [2, 1, 4, 3, 6, 5]])
        y = [1.0, 2.5, 2.0, 4.5, 4.0, 6.5]
        text = fit(X, y, names=["dose", "age"]).summary()
        assert "dose" in text
        assert "age" in text
        assert "Predictors: 2" in text


class TestFitErrors:

    def test_collinear_raises(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(SingularMatrixError) as exc_info:
            fit(X, y)
        assert exc_info.value.rank == 3
        assert exc_info.value.expected_rank == 4
        assert exc_info.value.matrix_name == "X'X"

    def test_constant_predictor_raises(self, rng):
        X = np.column_stack([rng.standard_normal(10), np.full(10, 2.0)])
        with pytest.raises(SingularMatrixError):
            fit(X, rng.standard_normal(10))

    def test_singular_is_computation_error(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(ComputationError):
            fit(X, y)

    def test_too_few_observations(self):
        with pytest.raises(InputError, match="at least 4"):
            fit([[1, 2], [2, 1], [3, 5]], [1, 2, 3])

    def test_names_length_mismatch(self):
        with pytest.raises(InputError, match="names"):
            fit([[1, 2], [2, 1], [3, 5], [4, 4]], [1, 2, 3, 4], names=["a"])

    def test_identical_y(self, simple_regression_data):
        X, _, _ = simple_regression_data
        with pytest.raises(ComputationError, match="identical"):
            fit(X, np.ones(len(X)))


class TestRegressionDesign:

    def test_intercept_column_added(self):
        design = RegressionDesign.for_multiple([[1, 2], [3, 4], [5, 6], [7, 9]], [1, 2, 3, 4])
        assert design.X.shape == (4, 3)
        np.testing.assert_array_equal(design.X[:, 0], 1.0)
        assert design.p == 3
        assert design.method == "normal_equations"

    def test_simple_design(self):
        design = RegressionDesign.for_simple([1, 2, 3], [2, 4, 7])
        assert design.k == 1
        assert design.names == ("x",)
        assert design.method == "simple"

    def test_column_y_flattened(self):
        design = RegressionDesign.for_multiple([1, 2, 3, 4], [[1], [2], [3], [5]])
        assert design.y.shape == (4,)
