"""
Analysis of Variance (ANOVA).

Public API:
    anova_oneway(groups, ...) -> AnovaSolution
    anova_twoway(cells, ...) -> AnovaSolution       # with interaction
    anova(rows, value, factors, ...) -> AnovaSolution   # from raw rows
    group_by_factor(rows, value, factor) -> {level: sample}
    group_by_factors(rows, value, factors) -> GroupedSamples
"""

from pystatengine.anova.solvers import (
    anova,
    anova_oneway,
    anova_twoway,
)
from pystatengine.anova._grouping import (
    GroupedSamples,
    group_by_factor,
    group_by_factors,
)
from pystatengine.anova.design import AnovaDesign
from pystatengine.anova._common import AnovaParams, AnovaTableRow
from pystatengine.anova.solution import AnovaSolution

__all__ = [
    "anova",
    "anova_oneway",
    "anova_twoway",
    "group_by_factor",
    "group_by_factors",
    "GroupedSamples",
    "AnovaDesign",
    "AnovaParams",
    "AnovaTableRow",
    "AnovaSolution",
]
