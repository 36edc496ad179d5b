"""
Shared fixtures for ANOVA tests.

Provides reusable datasets for one-way, two-way and raw-row scenarios.
"""

import numpy as np
import pytest


# =====================================================================
# One-way fixtures
# =====================================================================


@pytest.fixture
def oneway_balanced():
    """3-group balanced design (n=10 each), clear group differences."""
    rng = np.random.default_rng(42)
    return [
        rng.normal(10.0, 2.0, 10),
        rng.normal(15.0, 2.0, 10),
        rng.normal(20.0, 2.0, 10),
    ]


@pytest.fixture
def oneway_unbalanced():
    """3-group unbalanced design (n=5, 10, 15)."""
    rng = np.random.default_rng(123)
    return [
        rng.normal(10.0, 2.0, 5),
        rng.normal(15.0, 2.0, 10),
        rng.normal(20.0, 2.0, 15),
    ]


@pytest.fixture
def oneway_two_groups():
    """2-group design (should match the pooled two-sample t-test)."""
    rng = np.random.default_rng(77)
    return [rng.normal(10.0, 3.0, 20), rng.normal(12.0, 3.0, 20)]


# =====================================================================
# Two-way fixtures
# =====================================================================


@pytest.fixture
def twoway_cells():
    """
    2x2 balanced design with hand-computable sums of squares.

    Cell means 2, 6 / 4, 12; grand mean 6.
    SS_A = 32, SS_B = 72, SS_AB = 8, SS_E = 8, df_E = 4.
    """
    return [
        [[1.0, 3.0], [5.0, 7.0]],
        [[3.0, 5.0], [11.0, 13.0]],
    ]


@pytest.fixture
def twoway_rows(twoway_cells):
    """The twoway_cells data as raw row mappings."""
    rows = []
    for dose, row in zip(("low", "high"), twoway_cells):
        for sex, cell in zip(("f", "m"), row):
            for y in cell:
                rows.append({"dose": dose, "sex": sex, "y": y})
    return rows
