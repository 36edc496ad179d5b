"""
ANOVA solver dispatch.

Public API:
    anova_oneway(groups, ...) -> AnovaSolution
    anova_twoway(cells, ...) -> AnovaSolution
    anova(rows, value, factors, ...) -> AnovaSolution
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Mapping, Sequence

from pystatengine.core.constants import DEFAULT_ALPHA
from pystatengine.core.compute.timing import Timer
from pystatengine.core.distributions import resolve_distributions
from pystatengine.core.exceptions import InputError
from pystatengine.core.protocols import Distributions
from pystatengine.core.result import Result
from pystatengine.anova._common import AnovaParams
from pystatengine.anova._grouping import group_by_factors
from pystatengine.anova._ss import compute_oneway, compute_twoway
from pystatengine.anova.design import AnovaDesign
from pystatengine.anova.solution import AnovaSolution

logger = logging.getLogger(__name__)


def _eta_squared(rows, total_ss: float) -> dict[str, float]:
    return {
        r.term: (r.sum_sq / total_ss if total_ss > 0 else 0.0)
        for r in rows if r.term != 'Residuals'
    }


def anova_oneway(
    groups: Sequence[Any] | Mapping[Hashable, Any] | AnovaDesign,
    *,
    alpha: float = DEFAULT_ALPHA,
    factor_name: str = 'group',
    levels: Sequence[Hashable] | None = None,
    distributions: Distributions | None = None,
) -> AnovaSolution:
    """
    One-way Analysis of Variance.

    Tests whether the means of two or more groups are equal.

    Args:
        groups: Sequence of samples, mapping level -> sample, or a
            prebuilt one-way AnovaDesign
        alpha: Significance level. Default 0.05.
        factor_name: Name of the factor row in the table
        levels: Group labels for a sequence input (default 1..k)
        distributions: Source of the F CDF. Default scipy.stats.

    Returns:
        AnovaSolution with ANOVA table, eta squared and group means

    Examples:
        >>> result = anova_oneway([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        >>> result.statistic   # F for the group effect
        27.0
        >>> print(result.summary())
    """
    dist = resolve_distributions(distributions)
    timer = Timer()
    timer.start()

    if isinstance(groups, AnovaDesign):
        design = groups
        if design.design_type != 'oneway':
            raise InputError(
                f"anova_oneway: expected a one-way design, got {design.design_type!r}"
            )
    else:
        design = AnovaDesign.for_oneway(
            groups, alpha=alpha, factor_name=factor_name, levels=levels,
        )

    name = design.factor_names[0]
    with timer.section('sums_of_squares'):
        rows, stats = compute_oneway(design.groups, name, dist)

    labels = [str(level) for level in design.levels[0]]
    residual = rows[-1]
    timer.stop()

    params = AnovaParams(
        table=tuple(rows),
        design_type='oneway',
        alpha=design.alpha,
        n_obs=design.n,
        factor_names=design.factor_names,
        n_levels={name: len(labels)},
        grand_mean=stats['grand_mean'],
        group_means={name: {
            label: float(m) for label, m in zip(labels, stats['group_means'])
        }},
        cell_means=None,
        cell_counts=None,
        residual_df=residual.df,
        residual_ss=residual.sum_sq,
        residual_ms=residual.mean_sq,
        total_ss=stats['total_ss'],
        eta_squared=_eta_squared(rows, stats['total_ss']),
    )

    result = Result(
        params=params,
        info={'design_type': 'oneway', 'n_groups': len(labels)},
        timing=timer.result(),
        backend_name='cpu',
    )
    return AnovaSolution(_result=result)


def anova_twoway(
    cells: Sequence[Sequence[Any]] | AnovaDesign,
    *,
    alpha: float = DEFAULT_ALPHA,
    factor_names: Sequence[str] = ('A', 'B'),
    levels_a: Sequence[Hashable] | None = None,
    levels_b: Sequence[Hashable] | None = None,
    distributions: Distributions | None = None,
) -> AnovaSolution:
    """
    Two-way Analysis of Variance with interaction.

    Args:
        cells: a x b nested sequence of samples (cells[i][j] at level i of
            factor A and level j of factor B), or a prebuilt two-way
            AnovaDesign. Empty cells are allowed; they are left out of the
            interaction sum of squares and reported in `warnings`.
        alpha: Significance level. Default 0.05.
        factor_names: Names of factors A and B
        levels_a, levels_b: Level labels
        distributions: Source of the F CDF. Default scipy.stats.

    Returns:
        AnovaSolution with rows A, B, A:B and Residuals
    """
    dist = resolve_distributions(distributions)
    timer = Timer()
    timer.start()

    if isinstance(cells, AnovaDesign):
        design = cells
        if design.design_type != 'twoway':
            raise InputError(
                f"anova_twoway: expected a two-way design, got {design.design_type!r}"
            )
    else:
        design = AnovaDesign.for_twoway(
            cells,
            alpha=alpha,
            factor_names=factor_names,
            levels_a=levels_a,
            levels_b=levels_b,
        )

    name_a, name_b = design.factor_names
    with timer.section('sums_of_squares'):
        rows, stats = compute_twoway(design.cells, (name_a, name_b), dist)

    labels_a = [str(level) for level in design.levels[0]]
    labels_b = [str(level) for level in design.levels[1]]

    cell_means: dict[str, float] = {}
    cell_counts: dict[str, int] = {}
    for i, la in enumerate(labels_a):
        for j, lb in enumerate(labels_b):
            key = f"{la}:{lb}"
            cell_counts[key] = int(stats['counts'][i, j])
            if cell_counts[key] > 0:
                cell_means[key] = float(stats['cell_means'][i, j])

    warnings_list = []
    if stats['n_empty']:
        warnings_list.append(
            f"{stats['n_empty']} empty cell(s): left out of the "
            f"{name_a}:{name_b} sum of squares"
        )

    residual = rows[-1]
    timer.stop()

    params = AnovaParams(
        table=tuple(rows),
        design_type='twoway',
        alpha=design.alpha,
        n_obs=design.n,
        factor_names=design.factor_names,
        n_levels={name_a: len(labels_a), name_b: len(labels_b)},
        grand_mean=stats['grand_mean'],
        group_means={
            name_a: {l: float(m) for l, m in zip(labels_a, stats['row_means'])},
            name_b: {l: float(m) for l, m in zip(labels_b, stats['col_means'])},
        },
        cell_means=cell_means,
        cell_counts=cell_counts,
        residual_df=residual.df,
        residual_ss=residual.sum_sq,
        residual_ms=residual.mean_sq,
        total_ss=stats['total_ss'],
        eta_squared=_eta_squared(rows, stats['total_ss']),
    )

    result = Result(
        params=params,
        info={'design_type': 'twoway', 'n_empty_cells': stats['n_empty']},
        timing=timer.result(),
        backend_name='cpu',
        warnings=tuple(warnings_list),
    )
    return AnovaSolution(_result=result)


def anova(
    rows: Sequence[Mapping[str, Any]],
    value: str,
    factors: str | Sequence[str],
    *,
    alpha: float = DEFAULT_ALPHA,
    distributions: Distributions | None = None,
) -> AnovaSolution:
    """
    ANOVA on raw tabular rows.

    Groups the `value` column by one factor column (one-way) or two
    (two-way with interaction). Rows with a missing factor level or a
    non-numeric value are skipped.

    Args:
        rows: Sequence of mappings, one per record
        value: Name of the numeric response column
        factors: One factor column name, or a sequence of one or two
        alpha: Significance level. Default 0.05.
        distributions: Source of the F CDF.

    Examples:
        >>> rows = [{'dose': 'low', 'y': 4.1}, {'dose': 'high', 'y': 6.3}, ...]
        >>> anova(rows, 'y', 'dose').p_value
    """
    grouped = group_by_factors(rows, value, factors)
    logger.debug(
        "anova on %s: %d cell(s), %d row(s) skipped",
        grouped.factor_names, len(grouped.samples), grouped.n_skipped,
    )

    if len(grouped.factor_names) == 1:
        return anova_oneway(
            grouped.as_groups(),
            alpha=alpha,
            factor_name=grouped.factor_names[0],
            distributions=distributions,
        )

    return anova_twoway(
        grouped.as_cells(),
        alpha=alpha,
        factor_names=grouped.factor_names,
        levels_a=grouped.levels[0],
        levels_b=grouped.levels[1],
        distributions=distributions,
    )
