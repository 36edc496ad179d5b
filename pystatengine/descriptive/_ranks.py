"""
Rank and tie utilities shared by the rank-based tests.

Tied values receive the average of the ranks they would occupy if they
were distinct (mid-rank method). Ranks are 1-based, so the ranks of n
values always sum to n(n+1)/2.

    midranks([1, 1, 2, 3, 3, 3]) -> [1.5, 1.5, 3.0, 5.0, 5.0, 5.0]
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from pystatengine.core.validation import as_sample


def midranks(values: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    1-based ranks with ties averaged, parallel to `values`.

    Raises:
        InputError: If values is empty, non-numeric or non-finite
    """
    x = as_sample(values, "values")
    return sp_stats.rankdata(x, method='average').astype(np.float64)


def tie_counts(values: ArrayLike) -> NDArray[np.intp]:
    """Sizes of the tie groups in `values` (groups of size > 1 only)."""
    x = as_sample(values, "values")
    _, counts = np.unique(x, return_counts=True)
    return counts[counts > 1]


def has_ties(values: ArrayLike) -> bool:
    """True when at least two values are equal."""
    return len(tie_counts(values)) > 0
