"""
Tests for grouping raw rows into ANOVA samples.
"""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from pystatengine.core.exceptions import InputError
from pystatengine.anova import group_by_factor, group_by_factors


ROWS = [
    {"g": "b", "y": 1.0},
    {"g": "a", "y": "2.5"},
    {"g": "b", "y": 3},
    {"g": "", "y": 4.0},
    {"g": "a", "y": None},
    {"g": "a", "y": "n/a"},
    {"g": "c", "y": float("inf")},
    {"g": "a", "y": True},
    {"y": 5.0},
]


class TestGroupByFactor:

    def test_levels_in_first_appearance_order(self):
        groups = group_by_factor(ROWS, "y", "g")
        assert list(groups) == ["b", "a"]
        assert_array_equal(groups["b"], [1.0, 3.0])
        assert_array_equal(groups["a"], [2.5])

    def test_skipped_rows_counted(self):
        grouped = group_by_factors(ROWS, "y", "g")
        assert grouped.n_skipped == 6

    def test_numeric_levels_sorted(self):
        rows = [{"k": 3, "y": 1.0}, {"k": 1, "y": 2.0}, {"k": 2, "y": 3.0}]
        assert list(group_by_factor(rows, "y", "k")) == [1, 2, 3]

    def test_no_usable_rows(self):
        with pytest.raises(InputError, match="no usable rows"):
            group_by_factor([{"g": "a", "y": "x"}], "y", "g")


class TestGroupByFactors:

    def test_two_factor_cells(self):
        rows = [
            {"a": "x", "b": 1, "y": 1.0},
            {"a": "x", "b": 2, "y": 2.0},
            {"a": "z", "b": 1, "y": 3.0},
            {"a": "x", "b": 1, "y": 4.0},
        ]
        grouped = group_by_factors(rows, "y", ("a", "b"))
        assert grouped.levels == (("x", "z"), (1, 2))
        cells = grouped.as_cells()
        assert_array_equal(cells[0][0], [1.0, 4.0])
        assert_array_equal(cells[0][1], [2.0])
        assert_array_equal(cells[1][0], [3.0])
        assert len(cells[1][1]) == 0

    def test_as_groups_needs_one_factor(self):
        rows = [{"a": "x", "b": "y", "v": 1.0}]
        with pytest.raises(InputError):
            group_by_factors(rows, "v", ("a", "b")).as_groups()

    def test_as_cells_needs_two_factors(self):
        with pytest.raises(InputError):
            group_by_factors([{"a": "x", "v": 1.0}], "v", "a").as_cells()

    def test_no_factors(self):
        with pytest.raises(InputError, match="1 or 2"):
            group_by_factors([{"v": 1.0}], "v", ())

    def test_values_are_float_arrays(self):
        grouped = group_by_factors([{"a": "x", "v": 2}], "v", "a")
        assert grouped.samples[("x",)].dtype == np.float64
