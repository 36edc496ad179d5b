"""
Core protocols for pystatengine.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so a
caller can pass any object with the right methods, including a test stub.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, runtime_checkable

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class Distributions(Protocol):
    """
    Cumulative distribution functions consumed by the test engine.

    Every p-value in the library is derived from one of these four CDFs,
    so swapping the implementation swaps the numerics backend for all
    tests at once. Each method returns a value in [0, 1] for valid inputs.
    """

    def normal_cdf(self, x: float, mean: float = 0.0, sd: float = 1.0) -> float:
        """P(X <= x) for X ~ Normal(mean, sd)."""
        ...

    def student_t_cdf(self, t: float, df: float) -> float:
        """P(T <= t) for T ~ Student-t(df)."""
        ...

    def f_cdf(self, f: float, df1: float, df2: float) -> float:
        """P(F <= f) for F ~ F(df1, df2)."""
        ...

    def chi_square_cdf(self, x: float, df: float) -> float:
        """P(X <= x) for X ~ chi-square(df)."""
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend knows how to take a domain-specific Design and produce
    a Result envelope around a domain-specific parameter payload.

    Backends are stateless apart from construction-time configuration
    (the Distributions capability), which makes them safe to share
    between threads and easy to test.

    Type Parameters:
        D: The Design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{domain}'
        Examples: 'cpu_hypothesis', 'cpu_ols'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the statistical computation.

        Raises:
            ComputationError: If numerical issues prevent a solution
            InputError: If design is invalid for this backend
        """
        ...
