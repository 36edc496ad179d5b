"""
Descriptive statistics and rank utilities.

Shared primitives used by every test family.

Public API:
    mean(x)              - Arithmetic mean
    variance(x, ddof)    - Variance (ddof=1 sample, ddof=0 population)
    stddev(x, ddof)      - Standard deviation
    midranks(x)          - 1-based ranks, ties get the average rank
    tie_counts(x)        - Sizes of tie groups
"""

from pystatengine.descriptive._moments import mean, variance, stddev
from pystatengine.descriptive._ranks import midranks, tie_counts, has_ties

__all__ = [
    "mean",
    "variance",
    "stddev",
    "midranks",
    "tie_counts",
    "has_ties",
]
