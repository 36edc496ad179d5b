"""
CPU reference backend for hypothesis tests.

Dispatches to test-specific submodules based on design.test_type.
"""

from __future__ import annotations

import logging
import math

from pystatengine.core.exceptions import ComputationError
from pystatengine.core.result import Result
from pystatengine.core.compute.timing import Timer
from pystatengine.core.distributions import resolve_distributions
from pystatengine.core.protocols import Distributions
from pystatengine.hypothesis._common import HTestParams
from pystatengine.hypothesis.design import HypothesisDesign

logger = logging.getLogger(__name__)


class CPUHypothesisBackend:
    """CPU reference backend for hypothesis tests."""

    def __init__(self, distributions: Distributions | None = None):
        self._dist = resolve_distributions(distributions)

    @property
    def name(self) -> str:
        return 'cpu_hypothesis'

    @property
    def distributions(self) -> Distributions:
        return self._dist

    def solve(self, design: HypothesisDesign) -> Result[HTestParams]:
        """Dispatch to test-specific implementation based on design.test_type."""
        timer = Timer()
        timer.start()

        test_type = design.test_type
        dist = self._dist
        logger.debug("solving %s with %r", test_type, dist)

        with timer.section(test_type):
            if test_type == "t_one_sample":
                from pystatengine.hypothesis.backends._t_test import t_one_sample
                params, warnings_list = t_one_sample(design, dist)
            elif test_type == "t_paired":
                from pystatengine.hypothesis.backends._t_test import t_paired
                params, warnings_list = t_paired(design, dist)
            elif test_type == "t_independent":
                from pystatengine.hypothesis.backends._t_test import t_independent
                params, warnings_list = t_independent(design, dist)
            elif test_type == "z_one_sample":
                from pystatengine.hypothesis.backends._z_test import z_one_sample
                params, warnings_list = z_one_sample(design, dist)
            elif test_type == "z_two_sample":
                from pystatengine.hypothesis.backends._z_test import z_two_sample
                params, warnings_list = z_two_sample(design, dist)
            elif test_type == "sign_test":
                from pystatengine.hypothesis.backends._sign_test import sign_test
                params, warnings_list = sign_test(design, dist)
            elif test_type == "wilcoxon_signed_rank":
                from pystatengine.hypothesis.backends._wilcox_test import wilcoxon_signed_rank
                params, warnings_list = wilcoxon_signed_rank(design, dist)
            elif test_type == "mann_whitney_u":
                from pystatengine.hypothesis.backends._wilcox_test import mann_whitney_u
                params, warnings_list = mann_whitney_u(design, dist)
            elif test_type == "ks_normality":
                from pystatengine.hypothesis.backends._ks_test import ks_normality
                params, warnings_list = ks_normality(design, dist)
            elif test_type == "chisq_gof":
                from pystatengine.hypothesis.backends._chisq_test import chisq_gof
                params, warnings_list = chisq_gof(design, dist)
            elif test_type == "chisq_independence":
                from pystatengine.hypothesis.backends._chisq_test import chisq_independence
                params, warnings_list = chisq_independence(design, dist)
            else:
                raise ValueError(f"Unknown test_type: {test_type!r}")

        timer.stop()

        _check_finite_p(params)

        return Result(
            params=params,
            info={'test_type': test_type},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _check_finite_p(params: HTestParams) -> None:
    """A NaN p-value means the statistic itself was degenerate."""
    if math.isnan(params.p_value) or math.isnan(params.statistic):
        raise ComputationError(
            f"{params.method}: non-finite result "
            f"(statistic={params.statistic}, p_value={params.p_value})"
        )
