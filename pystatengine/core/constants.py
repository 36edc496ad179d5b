"""
Defaults and option strings for pystatengine.

This module is the SINGLE SOURCE OF TRUTH for option strings and numeric
defaults. Import from here, never use raw strings.

Usage:
    from pystatengine.core.constants import DEFAULT_ALPHA, TWO_TAILED

    result = t_test_one_sample(x, mu=5, alpha=DEFAULT_ALPHA,
                               alternative=TWO_TAILED)
"""

# Significance level used when the caller does not pass one
DEFAULT_ALPHA = 0.05

# Alternative hypothesis selectors
TWO_TAILED = 'two-tailed'
GREATER = 'greater'
LESS = 'less'

VALID_ALTERNATIVES = (TWO_TAILED, GREATER, LESS)

# Chi-square test types
GOODNESS_OF_FIT = 'goodness-of-fit'
INDEPENDENCE = 'independence'

VALID_CHISQ_TEST_TYPES = (GOODNESS_OF_FIT, INDEPENDENCE)

# Wilcoxon signed-rank: exact distribution up to this many nonzero
# differences, normal approximation above
WILCOXON_EXACT_MAX_N = 20

# Continuity correction applied to rank-sum normal approximations
CONTINUITY_CORRECTION = 0.5

# Kolmogorov-Smirnov: c(alpha=0.05) for the large-sample critical value
# D_crit = c / sqrt(n), and number of terms in the Kolmogorov series
KS_CRITICAL_COEFFICIENT = 1.36
KS_SERIES_TERMS = 100
KS_SERIES_RTOL = 1e-8

# Chi-square approximation is flagged when any expected count is below this
SMALL_EXPECTED_COUNT = 5.0

# Decision strings reported alongside the boolean `significant`
DECISION_REJECT = 'Reject the null hypothesis'
DECISION_FAIL_TO_REJECT = 'Fail to reject the null hypothesis'

# Decimal places used in regression equation strings
EQUATION_DECIMALS = 4

__all__ = [
    'DEFAULT_ALPHA',
    'TWO_TAILED',
    'GREATER',
    'LESS',
    'VALID_ALTERNATIVES',
    'GOODNESS_OF_FIT',
    'INDEPENDENCE',
    'VALID_CHISQ_TEST_TYPES',
    'WILCOXON_EXACT_MAX_N',
    'CONTINUITY_CORRECTION',
    'KS_CRITICAL_COEFFICIENT',
    'KS_SERIES_TERMS',
    'KS_SERIES_RTOL',
    'SMALL_EXPECTED_COUNT',
    'DECISION_REJECT',
    'DECISION_FAIL_TO_REJECT',
    'EQUATION_DECIMALS',
]
