"""
Common data types for ANOVA.

Contains the frozen parameter payloads that go inside Result[P] envelopes.
Each payload is a pure data container with no computation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AnovaTableRow:
    """One row of an ANOVA table (one term or residuals)."""
    term: str
    df: int
    sum_sq: float
    mean_sq: float
    f_value: float | None    # None for Residuals row
    p_value: float | None    # None for Residuals row


@dataclass(frozen=True)
class AnovaParams:
    """
    Parameter payload for one-way and two-way ANOVA.

    `group_means` maps factor name -> {level label: marginal mean};
    `cell_means` is filled for two-way designs only and maps
    "level_a:level_b" -> cell mean for non-empty cells.
    """
    table: tuple[AnovaTableRow, ...]
    design_type: str                               # 'oneway' or 'twoway'
    alpha: float
    n_obs: int
    factor_names: tuple[str, ...]
    n_levels: dict[str, int]                       # factor -> number of levels
    grand_mean: float
    group_means: dict[str, dict[str, float]]
    cell_means: dict[str, float] | None
    cell_counts: dict[str, int] | None
    residual_df: int
    residual_ss: float
    residual_ms: float
    total_ss: float
    eta_squared: dict[str, float]                  # term -> SS_term / SS_total
