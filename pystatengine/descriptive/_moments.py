"""
Sample moments: mean, variance, standard deviation.

`ddof` (delta degrees of freedom) selects the estimator:
    ddof=0 -> population (divide by n)
    ddof=1 -> sample, Bessel-corrected (divide by n - 1)
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystatengine.core.exceptions import InputError
from pystatengine.core.validation import as_sample


def _checked(sample: ArrayLike | NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    return as_sample(sample, "sample")


def mean(sample: ArrayLike) -> float:
    """Arithmetic mean. Raises InputError for an empty sample."""
    x = _checked(sample)
    return float(np.mean(x))


def variance(sample: ArrayLike, ddof: int = 1) -> float:
    """
    Variance with `ddof` delta degrees of freedom.

    Raises:
        InputError: If the sample is empty or has no more than `ddof`
            observations
    """
    x = _checked(sample)
    if ddof < 0:
        raise InputError(f"ddof: must be non-negative, got {ddof}")
    if len(x) <= ddof:
        raise InputError(
            f"sample: variance with ddof={ddof} needs more than {ddof} "
            f"observations, got {len(x)}"
        )
    if np.all(x == x[0]):
        return 0.0
    # Two-pass form
    deviations = x - np.mean(x)
    return float(np.sum(deviations * deviations) / (len(x) - ddof))


def stddev(sample: ArrayLike, ddof: int = 1) -> float:
    """Standard deviation, sqrt(variance(sample, ddof))."""
    return float(np.sqrt(variance(sample, ddof)))
