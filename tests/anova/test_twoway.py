"""
Tests for two-way ANOVA with interaction.
"""

import numpy as np
import pytest
from scipy import stats

from pystatengine.core.exceptions import DimensionError, InputError
from pystatengine.anova import anova, anova_twoway


class TestTwowayTable:

    def test_hand_computed(self, twoway_cells):
        result = anova_twoway(twoway_cells)
        assert result.terms == ("A", "B", "A:B")
        assert result.row("A").sum_sq == pytest.approx(32.0)
        assert result.row("B").sum_sq == pytest.approx(72.0)
        assert result.row("A:B").sum_sq == pytest.approx(8.0)
        assert result.residual_ss == pytest.approx(8.0)
        assert result.residual_df == 4
        assert result.residual_ms == pytest.approx(2.0)
        assert result.row("A").f_value == pytest.approx(16.0)
        assert result.row("B").f_value == pytest.approx(36.0)
        assert result.row("A:B").f_value == pytest.approx(4.0)
        assert result.row("A").p_value == pytest.approx(stats.f.sf(16.0, 1, 4))
        assert result.row("A:B").p_value == pytest.approx(stats.f.sf(4.0, 1, 4))
        assert result.grand_mean == pytest.approx(6.0)

    def test_primary_effect_is_factor_a(self, twoway_cells):
        result = anova_twoway(twoway_cells)
        assert result.statistic == pytest.approx(16.0)
        assert result.degrees_of_freedom == (1, 4)

    def test_decisions_per_term(self, twoway_cells):
        result = anova_twoway(twoway_cells)
        assert result.is_significant("B")
        assert not result.is_significant("A:B")
        assert result.decision_for("A:B") == "Fail to reject the null hypothesis"

    def test_eta_squared(self, twoway_cells):
        result = anova_twoway(twoway_cells)
        assert result.eta_squared["A"] == pytest.approx(32.0 / 120.0)
        assert result.eta_squared["B"] == pytest.approx(72.0 / 120.0)
        assert result.eta_squared["A:B"] == pytest.approx(8.0 / 120.0)

    def test_means(self, twoway_cells):
        result = anova_twoway(
            twoway_cells, factor_names=("dose", "sex"),
            levels_a=("low", "high"), levels_b=("f", "m"),
        )
        assert result.group_means["dose"] == {"low": 4.0, "high": 8.0}
        assert result.group_means["sex"] == {"f": 3.0, "m": 9.0}
        assert result.cell_means == {
            "low:f": 2.0, "low:m": 6.0, "high:f": 4.0, "high:m": 12.0,
        }
        assert result.terms == ("dose", "sex", "dose:sex")

    def test_balanced_ss_sum_to_total(self, rng):
        cells = [[rng.normal(i + j, 1.0, 4) for j in range(3)] for i in range(2)]
        result = anova_twoway(cells)
        pooled = np.concatenate([c for row in cells for c in row])
        total = np.sum((pooled - pooled.mean()) ** 2)
        ss = sum(r.sum_sq for r in result.table)
        assert ss == pytest.approx(total)


class TestTwowayEmptyCells:

    def test_empty_cell_warns(self):
        cells = [[[1.0, 2.0], [3.0, 4.0]], [[5.0, 6.0], []]]
        result = anova_twoway(cells)
        assert result.warnings == ("1 empty cell(s): left out of the A:B sum of squares",)
        assert result.residual_df == 2
        assert result.residual_ss == pytest.approx(1.5)
        assert "2:2" not in result.cell_means
        assert result.info["n_empty_cells"] == 1

    def test_empty_marginal_level_rejected(self):
        with pytest.raises(InputError, match="0 observations"):
            anova_twoway([[[1.0, 2.0], [3.0, 4.0]], [[], []]])


class TestTwowayInputs:

    def test_one_observation_per_cell(self):
        with pytest.raises(InputError, match="residual degrees of freedom"):
            anova_twoway([[[1.0], [2.0]], [[3.0], [4.0]]])

    def test_ragged_grid(self):
        with pytest.raises(DimensionError, match="row 1"):
            anova_twoway([[[1.0, 2.0], [3.0, 4.0]], [[5.0, 6.0]]])

    def test_single_level_factor(self):
        with pytest.raises(InputError, match="factor B"):
            anova_twoway([[[1.0, 2.0]], [[3.0, 4.0]]])

    def test_duplicate_factor_names(self):
        with pytest.raises(InputError, match="distinct"):
            anova_twoway([[[1.0, 2.0], [3.0, 4.0]], [[5.0, 6.0], [7.0, 9.0]]],
                         factor_names=("A", "A"))


class TestAnovaFromRows:

    def test_twoway_rows_match_cells(self, twoway_rows, twoway_cells):
        from_rows = anova(twoway_rows, "y", ["dose", "sex"])
        from_cells = anova_twoway(twoway_cells, factor_names=("dose", "sex"))
        for a, b in zip(from_rows.table, from_cells.table):
            assert a.sum_sq == pytest.approx(b.sum_sq)
            assert a.df == b.df

    def test_oneway_rows(self, twoway_rows):
        result = anova(twoway_rows, "y", "dose")
        assert result.design_type == "oneway"
        assert result.terms == ("dose",)
        assert result.group_means["dose"] == {"low": 4.0, "high": 8.0}

    def test_three_factors_rejected(self, twoway_rows):
        with pytest.raises(InputError, match="1 or 2"):
            anova(twoway_rows, "y", ["dose", "sex", "site"])

    def test_summary_lists_interaction(self, twoway_rows):
        text = anova(twoway_rows, "y", ("dose", "sex")).summary()
        assert "Two-way Analysis of Variance Table" in text
        assert "dose:sex" in text
