"""
Sums of squares computation for ANOVA.

One-way:
    SSB = sum_i n_i (mean_i - grand)^2           df = k - 1
    SSW = sum_i sum_j (x_ij - mean_i)^2          df = N - k

Two-way with interaction, from cell / marginal means weighted by counts:
    SS_A  = sum_i n_i. (row_i - grand)^2         df = a - 1
    SS_B  = sum_j n_.j (col_j - grand)^2         df = b - 1
    SS_AB = sum_ij n_ij (cell_ij - row_i - col_j + grand)^2
                                                 df = (a - 1)(b - 1)
    SS_E  = within-cell deviations               df = N - ab

Empty cells (n_ij = 0) contribute nothing to SS_AB. Every F is tested
against the residual mean square.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

from pystatengine.anova._common import AnovaTableRow
from pystatengine.core.exceptions import ComputationError, InputError

if TYPE_CHECKING:
    from pystatengine.core.protocols import Distributions

logger = logging.getLogger(__name__)


def _f_and_p(
    ss: float, df: int, ms_error: float, df_error: int, dist: Distributions,
) -> tuple[float, float]:
    """F = (ss / df) / ms_error with p = 1 - F CDF, clamped to [0, 1]."""
    f_val = (ss / df) / ms_error
    p_val = 1.0 - dist.f_cdf(f_val, df, df_error)
    return float(f_val), float(min(max(p_val, 0.0), 1.0))


def _centered_ss(sample: NDArray[np.floating[Any]]) -> float:
    """Sum of squared deviations from the sample's own mean; exact 0 if constant."""
    if len(sample) == 0 or np.all(sample == sample[0]):
        return 0.0
    return float(np.sum((sample - np.mean(sample)) ** 2))


def _residual_ms(ss_error: float, df_error: int) -> float:
    if df_error <= 0:
        raise InputError(
            f"residual degrees of freedom must be positive, got {df_error}: "
            f"need more observations than cells"
        )
    ms_error = ss_error / df_error
    if ms_error == 0.0:
        raise ComputationError(
            "residual mean square is zero (no variation within groups): "
            "F statistic undefined"
        )
    return ms_error


def compute_oneway(
    groups: tuple[NDArray[np.floating[Any]], ...],
    term: str,
    dist: Distributions,
) -> tuple[list[AnovaTableRow], dict[str, Any]]:
    """
    One-way ANOVA table.

    Returns:
        (rows, stats) where rows are [term, Residuals] and stats holds
        grand_mean, group_means and total_ss
    """
    k = len(groups)
    n_i = np.array([len(g) for g in groups], dtype=np.float64)
    n = int(n_i.sum())
    means = np.array([np.mean(g) for g in groups])
    grand = float(np.sum(np.concatenate(groups)) / n)

    ss_between = float(np.sum(n_i * (means - grand) ** 2))
    ss_within = float(sum(_centered_ss(g) for g in groups))
    df_between = k - 1
    df_within = n - k

    ms_within = _residual_ms(ss_within, df_within)
    f_val, p_val = _f_and_p(ss_between, df_between, ms_within, df_within, dist)
    logger.debug("one-way: k=%d, N=%d, F=%g", k, n, f_val)

    rows = [
        AnovaTableRow(
            term=term,
            df=df_between,
            sum_sq=ss_between,
            mean_sq=ss_between / df_between,
            f_value=f_val,
            p_value=p_val,
        ),
        AnovaTableRow(
            term='Residuals',
            df=df_within,
            sum_sq=ss_within,
            mean_sq=ms_within,
            f_value=None,
            p_value=None,
        ),
    ]
    stats = {
        'grand_mean': grand,
        'group_means': means,
        'total_ss': ss_between + ss_within,
    }
    return rows, stats


def compute_twoway(
    cells: tuple[tuple[NDArray[np.floating[Any]], ...], ...],
    factor_names: tuple[str, str],
    dist: Distributions,
) -> tuple[list[AnovaTableRow], dict[str, Any]]:
    """
    Two-way ANOVA table with interaction.

    Returns:
        (rows, stats) where rows are [A, B, A:B, Residuals] and stats holds
        grand_mean, row_means, col_means, cell_means (NaN for empty
        cells), counts, n_empty and total_ss
    """
    a = len(cells)
    b = len(cells[0])
    counts = np.array([[len(c) for c in row] for row in cells], dtype=np.float64)
    sums = np.array([[np.sum(c) for c in row] for row in cells], dtype=np.float64)
    n = int(counts.sum())
    grand = float(sums.sum() / n)

    n_row = counts.sum(axis=1)
    n_col = counts.sum(axis=0)
    row_means = sums.sum(axis=1) / n_row
    col_means = sums.sum(axis=0) / n_col

    filled = counts > 0
    cell_means = np.full((a, b), np.nan)
    cell_means[filled] = sums[filled] / counts[filled]

    ss_a = float(np.sum(n_row * (row_means - grand) ** 2))
    ss_b = float(np.sum(n_col * (col_means - grand) ** 2))

    interaction = cell_means - row_means[:, None] - col_means[None, :] + grand
    ss_ab = float(np.sum(counts[filled] * interaction[filled] ** 2))

    ss_error = float(sum(_centered_ss(c) for row in cells for c in row))

    df_a = a - 1
    df_b = b - 1
    df_ab = df_a * df_b
    df_error = n - a * b

    ms_error = _residual_ms(ss_error, df_error)
    n_empty = int(np.sum(~filled))
    logger.debug(
        "two-way: %dx%d, N=%d, empty cells=%d, MSE=%g", a, b, n, n_empty, ms_error,
    )

    name_a, name_b = factor_names
    rows = []
    for term, ss, df in (
        (name_a, ss_a, df_a),
        (name_b, ss_b, df_b),
        (f"{name_a}:{name_b}", ss_ab, df_ab),
    ):
        f_val, p_val = _f_and_p(ss, df, ms_error, df_error, dist)
        rows.append(AnovaTableRow(
            term=term,
            df=df,
            sum_sq=ss,
            mean_sq=ss / df,
            f_value=f_val,
            p_value=p_val,
        ))
    rows.append(AnovaTableRow(
        term='Residuals',
        df=df_error,
        sum_sq=ss_error,
        mean_sq=ms_error,
        f_value=None,
        p_value=None,
    ))

    all_values = np.concatenate([c for row in cells for c in row])
    stats = {
        'grand_mean': grand,
        'row_means': row_means,
        'col_means': col_means,
        'cell_means': cell_means,
        'counts': counts,
        'n_empty': n_empty,
        'total_ss': float(np.sum((all_values - grand) ** 2)),
    }
    return rows, stats
