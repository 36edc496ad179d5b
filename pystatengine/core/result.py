"""
Generic result container for all pystatengine computations.

Every backend returns a Result envelope; the public functions wrap it in
a domain-specific Solution object. Keeping one envelope lets timing,
warnings and backend identity be handled the same way everywhere.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (test type, method branch)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so re-running a test can be compared
      field by field with an earlier run
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (statistics, p-values, tables)
        info: Structured metadata (test type, exact vs asymptotic branch)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=HTestParams(...),
        ...     info={'test_type': 't_one_sample'},
        ...     timing={'total_seconds': 0.0001},
        ...     backend_name='cpu_hypothesis'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
