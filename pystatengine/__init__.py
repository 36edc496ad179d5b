"""
PyStatEngine: a statistical test engine for Python.

Parametric and nonparametric hypothesis tests, chi-square tests of
association, one- and two-way ANOVA and least-squares regression, each
returning a Solution object with the statistic, p-value and decision.

Submodules:
    descriptive: Moments and rank utilities
    hypothesis: t, z, sign, Wilcoxon, Mann-Whitney, KS and chi-square tests
    anova: One-way and two-way analysis of variance
    regression: Simple and multiple linear regression
"""

import logging

__version__ = "0.1.0"

# Library logging: records go nowhere unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

from pystatengine import descriptive
from pystatengine import hypothesis
from pystatengine import anova
from pystatengine import regression

__all__ = [
    "__version__",
    "descriptive",
    "hypothesis",
    "anova",
    "regression",
]
