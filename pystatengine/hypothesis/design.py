"""
HypothesisDesign: tagged union for hypothesis test inputs.

Uses factory classmethods per test type. The `test_type` field identifies
which fields are populated. Immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Sequence
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pystatengine.core.constants import DEFAULT_ALPHA, TWO_TAILED
from pystatengine.core.encoding import FactorEncoding, encode_pair, is_missing
from pystatengine.core.exceptions import InputError
from pystatengine.core.validation import (
    as_sample,
    check_array,
    check_2d,
    check_alpha,
    check_alternative,
    check_consistent_length,
    check_finite,
    check_positive,
)


def _paired_differences(
    x: ArrayLike, y: ArrayLike, min_samples: int,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Validate two samples of equal length and return (x, y, x - y)."""
    x_arr = as_sample(x, "x", min_samples)
    y_arr = as_sample(y, "y", min_samples)
    check_consistent_length(x_arr, y_arr, names=("x", "y"))
    return x_arr, y_arr, x_arr - y_arr


@dataclass(frozen=True)
class HypothesisDesign:
    """
    Design for hypothesis tests.

    Uses a tagged-union approach: the `test_type` field identifies which
    fields are populated. Factory classmethods validate inputs.

    Do not construct directly; use factory classmethods.
    """
    test_type: str

    # Numeric vectors
    _x: NDArray[np.floating[Any]] | None = None
    _y: NDArray[np.floating[Any]] | None = None

    # Test configuration
    _mu: float = 0.0
    _alpha: float = DEFAULT_ALPHA
    _alternative: str = TWO_TAILED

    # Known population standard deviations (z-tests)
    _sigma_x: float | None = None
    _sigma_y: float | None = None

    # Observed counts: 1D for goodness-of-fit, 2D for independence
    _table: NDArray[np.floating[Any]] | None = None
    _row_levels: tuple[Hashable, ...] | None = None
    _col_levels: tuple[Hashable, ...] | None = None
    _expected_p: NDArray[np.floating[Any]] | None = None

    # Metadata
    _data_name: str = ""

    # --- Properties ---

    @property
    def x(self) -> NDArray[np.floating[Any]] | None:
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]] | None:
        return self._y

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def alternative(self) -> str:
        return self._alternative

    @property
    def sigma_x(self) -> float | None:
        return self._sigma_x

    @property
    def sigma_y(self) -> float | None:
        return self._sigma_y

    @property
    def table(self) -> NDArray[np.floating[Any]] | None:
        return self._table

    @property
    def row_levels(self) -> tuple[Hashable, ...] | None:
        return self._row_levels

    @property
    def col_levels(self) -> tuple[Hashable, ...] | None:
        return self._col_levels

    @property
    def expected_p(self) -> NDArray[np.floating[Any]] | None:
        return self._expected_p

    @property
    def data_name(self) -> str:
        return self._data_name

    # --- Parametric ---

    @classmethod
    def for_t_test(
        cls,
        x: ArrayLike,
        y: ArrayLike | None = None,
        *,
        mu: float = 0.0,
        paired: bool = False,
        alpha: float = DEFAULT_ALPHA,
        alternative: str = TWO_TAILED,
    ) -> HypothesisDesign:
        """
        Build design for the t-tests.

        One-sample when y is None; paired when `paired`, storing the
        per-index differences x - y in `x`; otherwise independent
        two-sample with pooled variance.
        """
        alternative = check_alternative(alternative)
        alpha = check_alpha(alpha)

        if y is None:
            if paired:
                raise InputError("Paired t-test requires y")
            return cls(
                test_type="t_one_sample",
                _x=as_sample(x, "x", 2),
                _mu=float(mu),
                _alpha=alpha,
                _alternative=alternative,
                _data_name="x",
            )

        if paired:
            _, _, diffs = _paired_differences(x, y, 2)
            return cls(
                test_type="t_paired",
                _x=diffs,
                _mu=float(mu),
                _alpha=alpha,
                _alternative=alternative,
                _data_name="x and y",
            )

        return cls(
            test_type="t_independent",
            _x=as_sample(x, "x", 2),
            _y=as_sample(y, "y", 2),
            _mu=float(mu),
            _alpha=alpha,
            _alternative=alternative,
            _data_name="x and y",
        )

    @classmethod
    def for_z_test(
        cls,
        x: ArrayLike,
        y: ArrayLike | None = None,
        *,
        sigma_x: float,
        sigma_y: float | None = None,
        mu: float = 0.0,
        alpha: float = DEFAULT_ALPHA,
        alternative: str = TWO_TAILED,
    ) -> HypothesisDesign:
        """
        Build design for the z-tests (known population standard deviations).

        For the two-sample test `mu` is the hypothesised difference
        mu_x - mu_y.
        """
        alternative = check_alternative(alternative)
        alpha = check_alpha(alpha)
        sigma_x = check_positive(sigma_x, "sigma_x")

        if y is None:
            return cls(
                test_type="z_one_sample",
                _x=as_sample(x, "x"),
                _mu=float(mu),
                _sigma_x=sigma_x,
                _alpha=alpha,
                _alternative=alternative,
                _data_name="x",
            )

        if sigma_y is None:
            raise InputError("sigma_y: required for the two-sample z-test")
        return cls(
            test_type="z_two_sample",
            _x=as_sample(x, "x"),
            _y=as_sample(y, "y"),
            _mu=float(mu),
            _sigma_x=sigma_x,
            _sigma_y=check_positive(sigma_y, "sigma_y"),
            _alpha=alpha,
            _alternative=alternative,
            _data_name="x and y",
        )

    # --- Nonparametric ---

    @classmethod
    def for_sign_test(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        *,
        alpha: float = DEFAULT_ALPHA,
    ) -> HypothesisDesign:
        """Build design for the paired sign test. Stores x - y in `x`."""
        alpha = check_alpha(alpha)
        _, _, diffs = _paired_differences(x, y, 1)
        return cls(
            test_type="sign_test",
            _x=diffs,
            _alpha=alpha,
            _data_name="x and y",
        )

    @classmethod
    def for_signed_rank_test(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        *,
        alpha: float = DEFAULT_ALPHA,
    ) -> HypothesisDesign:
        """Build design for the Wilcoxon signed-rank test. Stores x - y in `x`."""
        alpha = check_alpha(alpha)
        _, _, diffs = _paired_differences(x, y, 1)
        return cls(
            test_type="wilcoxon_signed_rank",
            _x=diffs,
            _alpha=alpha,
            _data_name="x and y",
        )

    @classmethod
    def for_mann_whitney(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        *,
        alpha: float = DEFAULT_ALPHA,
    ) -> HypothesisDesign:
        """Build design for the Mann-Whitney U test."""
        return cls(
            test_type="mann_whitney_u",
            _x=as_sample(x, "x"),
            _y=as_sample(y, "y"),
            _alpha=check_alpha(alpha),
            _data_name="x and y",
        )

    @classmethod
    def for_ks_normality(
        cls,
        x: ArrayLike,
        *,
        alpha: float = DEFAULT_ALPHA,
    ) -> HypothesisDesign:
        """Build design for the KS normality test (parameters from the sample)."""
        return cls(
            test_type="ks_normality",
            _x=as_sample(x, "x", 2),
            _alpha=check_alpha(alpha),
            _data_name="x",
        )

    # --- Chi-square ---

    @classmethod
    def for_chisq_gof(
        cls,
        values: Sequence[Any],
        *,
        expected_p: ArrayLike | None = None,
        alpha: float = DEFAULT_ALPHA,
    ) -> HypothesisDesign:
        """
        Build design for the goodness-of-fit test from one categorical column.

        Missing entries (None, blank strings, NaN) are dropped before
        tabulation. `expected_p` gives the expected proportion of each
        category in level order and is rescaled to sum to 1; None means
        uniform.
        """
        alpha = check_alpha(alpha)
        if isinstance(values, (str, bytes)) or not hasattr(values, '__iter__'):
            raise InputError(
                f"values: expected a sequence of categories, got {type(values).__name__}"
            )
        present = [v for v in values if not is_missing(v)]
        encoding = FactorEncoding.from_values(present, "values")
        if encoding.n_levels < 2:
            raise InputError(
                f"values: need at least 2 categories, got {encoding.n_levels}"
            )

        p_arr = None
        if expected_p is not None:
            p_arr = check_array(expected_p, "expected_p").ravel()
            check_finite(p_arr, "expected_p")
            if len(p_arr) != encoding.n_levels:
                raise InputError(
                    f"expected_p: length {len(p_arr)} doesn't match "
                    f"{encoding.n_levels} observed categories"
                )
            if np.any(p_arr < 0) or np.sum(p_arr) <= 0:
                raise InputError("expected_p: must be non-negative with a positive sum")
            p_arr = p_arr / np.sum(p_arr)

        return cls(
            test_type="chisq_gof",
            _table=encoding.counts(),
            _row_levels=encoding.levels,
            _expected_p=p_arr,
            _alpha=alpha,
            _data_name="values",
        )

    @classmethod
    def for_chisq_independence(
        cls,
        x: Sequence[Any],
        y: Sequence[Any],
        *,
        alpha: float = DEFAULT_ALPHA,
    ) -> HypothesisDesign:
        """
        Build design for the independence test from two categorical columns.

        Rows are the levels of x, columns the levels of y. Pairs with a
        missing entry are dropped.
        """
        alpha = check_alpha(alpha)
        enc_x, enc_y = encode_pair(x, y)
        table = np.zeros((enc_x.n_levels, enc_y.n_levels), dtype=np.float64)
        np.add.at(table, (enc_x.codes, enc_y.codes), 1.0)
        return cls._table_design(
            table, enc_x.levels, enc_y.levels, alpha, data_name="x and y",
        )

    @classmethod
    def for_chisq_table(
        cls,
        table: ArrayLike,
        *,
        row_levels: Sequence[Hashable] | None = None,
        col_levels: Sequence[Hashable] | None = None,
        alpha: float = DEFAULT_ALPHA,
    ) -> HypothesisDesign:
        """Build design for the independence test from a ready contingency table."""
        alpha = check_alpha(alpha)
        t = check_array(table, "table")
        check_2d(t, "table")
        check_finite(t, "table")
        if np.any(t < 0):
            raise InputError("table: counts must be non-negative")
        if np.any(t != np.floor(t)):
            raise InputError("table: counts must be whole numbers")
        nrow, ncol = t.shape
        rows = tuple(row_levels) if row_levels is not None else tuple(range(1, nrow + 1))
        cols = tuple(col_levels) if col_levels is not None else tuple(range(1, ncol + 1))
        if len(rows) != nrow or len(cols) != ncol:
            raise InputError(
                f"table: shape {t.shape} doesn't match {len(rows)} row levels "
                f"and {len(cols)} column levels"
            )
        return cls._table_design(t, rows, cols, alpha, data_name="table")

    @classmethod
    def _table_design(
        cls,
        table: NDArray[np.floating[Any]],
        row_levels: tuple[Hashable, ...],
        col_levels: tuple[Hashable, ...],
        alpha: float,
        data_name: str,
    ) -> HypothesisDesign:
        nrow, ncol = table.shape
        if nrow < 2 or ncol < 2:
            raise InputError(
                f"table: need at least 2 rows and 2 columns, got {nrow}x{ncol}"
            )
        if table.sum() <= 0:
            raise InputError("table: grand total is zero")
        return cls(
            test_type="chisq_independence",
            _table=table,
            _row_levels=row_levels,
            _col_levels=col_levels,
            _alpha=alpha,
            _data_name=data_name,
        )
