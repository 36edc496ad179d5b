"""
Factor encoding for categorical columns.

A FactorEncoding maps the observed levels of one column to integer codes
0..k-1. It is built once per column per invocation and never persisted.

Level order:
    - all levels numeric -> ascending numeric order
    - otherwise -> order of first appearance
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Any, Hashable, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from pystatengine.core.exceptions import InputError, DimensionError


def is_missing(value: Any) -> bool:
    """True for None, empty/blank strings and float NaN."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (float, np.floating)):
        return bool(np.isnan(value))
    return False


def _is_numeric_level(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, (bool, np.bool_))


@dataclass(frozen=True)
class FactorEncoding:
    """
    Bijection between observed levels and integer codes.

    Attributes:
        levels: Distinct levels, position i has code i
        codes: Code of each input value, parallel to the input
    """
    levels: tuple[Hashable, ...]
    codes: NDArray[np.intp]

    @classmethod
    def from_values(cls, values: Iterable[Any], name: str = "factor") -> FactorEncoding:
        """
        Encode a column of raw levels.

        Raises:
            InputError: If the column is empty, contains a missing value,
                or contains an unhashable value
        """
        raw = list(values)
        if not raw:
            raise InputError(f"{name}: no observations to encode")

        first_seen: dict[Hashable, int] = {}
        for i, v in enumerate(raw):
            if is_missing(v):
                raise InputError(f"{name}: missing value at position {i}")
            try:
                if v not in first_seen:
                    first_seen[v] = len(first_seen)
            except TypeError as e:
                raise InputError(
                    f"{name}: unhashable level {v!r} at position {i}"
                ) from e

        levels = list(first_seen)
        if all(_is_numeric_level(v) for v in levels):
            levels.sort()

        lookup = {level: code for code, level in enumerate(levels)}
        codes = np.fromiter((lookup[v] for v in raw), dtype=np.intp, count=len(raw))
        return cls(levels=tuple(levels), codes=codes)

    @property
    def n_levels(self) -> int:
        return len(self.levels)

    def code_of(self, level: Hashable) -> int:
        """Integer code of a level."""
        try:
            return self.levels.index(level)
        except ValueError:
            raise InputError(f"unknown level {level!r}") from None

    def counts(self) -> NDArray[np.floating[Any]]:
        """Observed frequency of each level, in level order."""
        return np.bincount(self.codes, minlength=self.n_levels).astype(np.float64)

    def labels(self) -> tuple[str, ...]:
        """Levels rendered as strings, for tables and summaries."""
        return tuple(str(level) for level in self.levels)


def encode_pair(
    x: Sequence[Any],
    y: Sequence[Any],
    names: tuple[str, str] = ("x", "y"),
) -> tuple[FactorEncoding, FactorEncoding]:
    """
    Encode two parallel categorical columns, dropping incomplete pairs.

    Raises:
        DimensionError: If the columns differ in length
        InputError: If no complete pair remains
    """
    x_list, y_list = list(x), list(y)
    if len(x_list) != len(y_list):
        raise DimensionError(
            f"Inconsistent lengths: {names[0]}={len(x_list)}, {names[1]}={len(y_list)}"
        )
    pairs = [
        (a, b) for a, b in zip(x_list, y_list)
        if not is_missing(a) and not is_missing(b)
    ]
    if not pairs:
        raise InputError(f"{names[0]}, {names[1]}: no complete pairs of observations")
    return (
        FactorEncoding.from_values((a for a, _ in pairs), names[0]),
        FactorEncoding.from_values((b for _, b in pairs), names[1]),
    )
