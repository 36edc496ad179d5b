"""
Group raw tabular rows into ANOVA samples.

Rows are mappings (one per record, e.g. csv.DictReader output). A row is
skipped when any factor column is missing or blank, or when its value
column does not hold a finite number. Numeric strings ("12.5") count as
numbers.

Level order follows FactorEncoding: ascending when every level of a
factor is numeric, otherwise order of first appearance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Number
from typing import Any, Hashable, Mapping, Sequence

import numpy as np
from numpy.typing import NDArray

from pystatengine.core.encoding import FactorEncoding, is_missing
from pystatengine.core.exceptions import InputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupedSamples:
    """
    Samples keyed by factor-level combination.

    Attributes:
        factor_names: One or two factor column names
        levels: Per factor, the observed levels in encoding order
        samples: (level, ...) -> 1D float array; only observed
            combinations are present
        n_skipped: Rows dropped for a missing level or non-numeric value
    """
    factor_names: tuple[str, ...]
    levels: tuple[tuple[Hashable, ...], ...]
    samples: dict[tuple[Hashable, ...], NDArray[np.floating[Any]]]
    n_skipped: int

    def as_groups(self) -> dict[Hashable, NDArray[np.floating[Any]]]:
        """One-factor view: level -> sample, in level order."""
        if len(self.factor_names) != 1:
            raise InputError(
                f"as_groups: needs exactly 1 factor, have {len(self.factor_names)}"
            )
        return {level: self.samples[(level,)] for level in self.levels[0]}

    def as_cells(self) -> list[list[NDArray[np.floating[Any]]]]:
        """Two-factor view: a x b nested list, empty array for unseen cells."""
        if len(self.factor_names) != 2:
            raise InputError(
                f"as_cells: needs exactly 2 factors, have {len(self.factor_names)}"
            )
        empty = np.empty(0, dtype=np.float64)
        return [
            [self.samples.get((a, b), empty) for b in self.levels[1]]
            for a in self.levels[0]
        ]


def _as_finite_number(value: Any) -> float | None:
    """Coerce a cell to float, or None if it is not a finite number."""
    if isinstance(value, (bool, np.bool_)) or is_missing(value):
        return None
    if isinstance(value, Number):
        v = float(value)
    elif isinstance(value, str):
        try:
            v = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return v if np.isfinite(v) else None


def group_by_factors(
    rows: Sequence[Mapping[str, Any]],
    value: str,
    factors: Sequence[str],
) -> GroupedSamples:
    """
    Group the `value` column of `rows` by one or two factor columns.

    Raises:
        InputError: If not 1 or 2 factors are named, or no row survives
    """
    if isinstance(factors, str):
        factors = (factors,)
    factor_names = tuple(factors)
    if len(factor_names) not in (1, 2):
        raise InputError(
            f"factors: expected 1 or 2 factor columns, got {len(factor_names)}"
        )
    if not value:
        raise InputError("value: a value column name is required")

    kept_levels: list[list[Hashable]] = [[] for _ in factor_names]
    kept_values: list[float] = []
    n_skipped = 0

    for row in rows:
        keys = [row.get(f) for f in factor_names]
        v = _as_finite_number(row.get(value))
        if v is None or any(is_missing(k) for k in keys):
            n_skipped += 1
            continue
        for store, k in zip(kept_levels, keys):
            store.append(k)
        kept_values.append(v)

    if not kept_values:
        raise InputError(
            f"no usable rows: every row lacks a level of {factor_names} "
            f"or a finite {value!r}"
        )
    if n_skipped:
        logger.debug("grouping by %s: skipped %d row(s)", factor_names, n_skipped)

    encodings = [
        FactorEncoding.from_values(store, name)
        for store, name in zip(kept_levels, factor_names)
    ]
    values_arr = np.asarray(kept_values, dtype=np.float64)
    codes = np.column_stack([enc.codes for enc in encodings])

    samples: dict[tuple[Hashable, ...], NDArray[np.floating[Any]]] = {}
    for combo in np.unique(codes, axis=0):
        mask = np.all(codes == combo, axis=1)
        key = tuple(enc.levels[c] for enc, c in zip(encodings, combo))
        samples[key] = values_arr[mask]

    return GroupedSamples(
        factor_names=factor_names,
        levels=tuple(enc.levels for enc in encodings),
        samples=samples,
        n_skipped=n_skipped,
    )


def group_by_factor(
    rows: Sequence[Mapping[str, Any]],
    value: str,
    factor: str,
) -> dict[Hashable, NDArray[np.floating[Any]]]:
    """Group the `value` column by a single factor: level -> sample."""
    return group_by_factors(rows, value, (factor,)).as_groups()
