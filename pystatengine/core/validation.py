"""
Input validation utilities for pystatengine.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pystatengine.core.constants import VALID_ALTERNATIVES
from pystatengine.core.exceptions import InputError, DimensionError, DomainError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects scalars,
    inputs that result in object dtype (mixed types) and non-numeric
    dtypes (strings, booleans, datetimes).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        InputError: If input cannot be converted to numeric array
    """
    if array is None or np.isscalar(array):
        raise InputError(
            f"{name}: expected an array of numbers, got {type(array).__name__}"
        )

    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise InputError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise InputError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise InputError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        InputError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise InputError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        InputError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise InputError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_alpha(alpha: float) -> float:
    """
    Verify the significance level lies strictly between 0 and 1.

    Raises:
        InputError: If alpha is not a number in (0, 1)
    """
    if isinstance(alpha, bool) or not isinstance(alpha, (int, float, np.floating)):
        raise InputError(f"alpha: expected a number, got {type(alpha).__name__}")
    if not (0.0 < alpha < 1.0):
        raise InputError(f"alpha: must be in (0, 1), got {alpha}")
    return float(alpha)


def check_alternative(alternative: str) -> str:
    """
    Verify the alternative hypothesis selector.

    Raises:
        DomainError: If alternative is not one of VALID_ALTERNATIVES
    """
    if alternative not in VALID_ALTERNATIVES:
        raise DomainError(
            f"alternative must be one of {VALID_ALTERNATIVES}, got {alternative!r}",
            option='alternative',
            value=alternative,
        )
    return alternative


def check_positive(value: float, name: str) -> float:
    """
    Verify a scalar parameter is a finite positive number.

    Raises:
        InputError: If value is not finite and > 0
    """
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise InputError(f"{name}: expected a number, got {value!r}") from e
    if not np.isfinite(v) or v <= 0.0:
        raise InputError(f"{name}: must be a finite positive number, got {value!r}")
    return v


def as_sample(
    x: ArrayLike,
    name: str,
    min_samples: int = 1,
) -> NDArray[np.floating[Any]]:
    """
    Validate a numeric sample in one call.

    Converts to float64, requires 1D, finite values and at least
    `min_samples` observations.

    Returns:
        Validated 1D float64 array
    """
    arr = check_array(x, name)
    check_1d(arr, name)
    check_min_samples(arr, max(min_samples, 1), name)
    check_finite(arr, name)
    return arr
