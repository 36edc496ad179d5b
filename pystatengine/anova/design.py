"""
ANOVA design object.

Wraps validated samples and metadata for ANOVA computation.
Factory methods handle the two layouts (one-way groups, two-way cells).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Mapping, Sequence

import numpy as np
from numpy.typing import NDArray

from pystatengine.core.constants import DEFAULT_ALPHA
from pystatengine.core.exceptions import InputError, DimensionError
from pystatengine.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_alpha,
)


def _check_sample(sample: Any, name: str) -> NDArray[np.floating[Any]]:
    """Validate one group / cell. Empty is allowed here."""
    arr = check_array(sample, name)
    check_1d(arr, name)
    check_finite(arr, name)
    return arr


def _check_levels(
    levels: Sequence[Hashable] | None, expected: int, name: str,
) -> tuple[Hashable, ...]:
    if levels is None:
        return tuple(range(1, expected + 1))
    levels = tuple(levels)
    if len(levels) != expected:
        raise DimensionError(
            f"{name}: {len(levels)} labels given for {expected} levels"
        )
    return levels


@dataclass(frozen=True)
class AnovaDesign:
    """
    Validated data container for ANOVA.

    For 'oneway', `samples` holds one tuple of k group samples.
    For 'twoway', `samples` holds a rows (factor A) x columns (factor B)
    grid of cell samples; cells may be empty.

    Created via factory methods, not directly.
    """
    samples: tuple[tuple[NDArray[np.floating[Any]], ...], ...]
    factor_names: tuple[str, ...]
    levels: tuple[tuple[Hashable, ...], ...]
    alpha: float
    n: int
    design_type: str   # 'oneway' or 'twoway'

    @property
    def groups(self) -> tuple[NDArray[np.floating[Any]], ...]:
        """One-way groups, in level order."""
        if self.design_type != 'oneway':
            raise InputError("groups: only defined for one-way designs")
        return self.samples[0]

    @property
    def cells(self) -> tuple[tuple[NDArray[np.floating[Any]], ...], ...]:
        """Two-way cells, indexed [level of A][level of B]."""
        if self.design_type != 'twoway':
            raise InputError("cells: only defined for two-way designs")
        return self.samples

    @staticmethod
    def for_oneway(
        groups: Sequence[Any] | Mapping[Hashable, Any],
        *,
        alpha: float = DEFAULT_ALPHA,
        factor_name: str = 'group',
        levels: Sequence[Hashable] | None = None,
    ) -> AnovaDesign:
        """
        Create design for one-way ANOVA.

        Args:
            groups: Sequence of samples, or mapping level -> sample
            alpha: Significance level
            factor_name: Name used for the factor row of the table
            levels: Labels of the groups (ignored for a mapping, whose
                keys are the labels)

        Returns:
            AnovaDesign for one-way ANOVA
        """
        alpha = check_alpha(alpha)
        if isinstance(groups, Mapping):
            levels = tuple(groups.keys())
            raw = list(groups.values())
        else:
            if isinstance(groups, (str, bytes)) or not hasattr(groups, '__len__'):
                raise InputError(
                    f"groups: expected a sequence of samples, got {type(groups).__name__}"
                )
            raw = list(groups)
            levels = _check_levels(levels, len(raw), "levels")

        if len(raw) < 2:
            raise InputError(f"groups: need at least 2 groups, got {len(raw)}")

        arrays = []
        for label, sample in zip(levels, raw):
            arr = _check_sample(sample, f"group {label!r}")
            if len(arr) == 0:
                raise InputError(f"group {label!r}: has 0 observations")
            arrays.append(arr)

        n = sum(len(a) for a in arrays)
        if n - len(arrays) < 1:
            raise InputError(
                f"groups: need more observations than groups for a residual "
                f"degree of freedom, got N={n}, k={len(arrays)}"
            )

        return AnovaDesign(
            samples=(tuple(arrays),),
            factor_names=(factor_name,),
            levels=(tuple(levels),),
            alpha=alpha,
            n=n,
            design_type='oneway',
        )

    @staticmethod
    def for_twoway(
        cells: Sequence[Sequence[Any]],
        *,
        alpha: float = DEFAULT_ALPHA,
        factor_names: Sequence[str] = ('A', 'B'),
        levels_a: Sequence[Hashable] | None = None,
        levels_b: Sequence[Hashable] | None = None,
    ) -> AnovaDesign:
        """
        Create design for two-way ANOVA with interaction.

        Args:
            cells: a x b nested sequence; cells[i][j] is the sample at
                level i of factor A and level j of factor B. Empty cells
                are allowed.
            alpha: Significance level
            factor_names: Names of factor A and factor B
            levels_a, levels_b: Level labels (default 1..a, 1..b)

        Returns:
            AnovaDesign for two-way ANOVA
        """
        alpha = check_alpha(alpha)
        factor_names = tuple(factor_names)
        if len(factor_names) != 2:
            raise InputError(
                f"factor_names: expected 2 names, got {len(factor_names)}"
            )
        if len(set(factor_names)) != 2:
            raise InputError(f"factor_names: must be distinct, got {factor_names}")

        rows = list(cells)
        a = len(rows)
        if a < 2:
            raise InputError(f"cells: need at least 2 levels of factor A, got {a}")
        b = len(rows[0])
        if b < 2:
            raise InputError(f"cells: need at least 2 levels of factor B, got {b}")
        for i, row in enumerate(rows):
            if len(row) != b:
                raise DimensionError(
                    f"cells: row {i} has {len(row)} cells, expected {b}"
                )

        levels_a = _check_levels(levels_a, a, "levels_a")
        levels_b = _check_levels(levels_b, b, "levels_b")

        grid = tuple(
            tuple(
                _check_sample(rows[i][j], f"cell ({levels_a[i]!r}, {levels_b[j]!r})")
                for j in range(b)
            )
            for i in range(a)
        )
        counts = np.array([[len(c) for c in row] for row in grid])

        for i in np.flatnonzero(counts.sum(axis=1) == 0):
            raise InputError(
                f"{factor_names[0]}: level {levels_a[i]!r} has 0 observations"
            )
        for j in np.flatnonzero(counts.sum(axis=0) == 0):
            raise InputError(
                f"{factor_names[1]}: level {levels_b[j]!r} has 0 observations"
            )

        n = int(counts.sum())
        return AnovaDesign(
            samples=grid,
            factor_names=factor_names,
            levels=(levels_a, levels_b),
            alpha=alpha,
            n=n,
            design_type='twoway',
        )
