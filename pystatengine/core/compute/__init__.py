"""
Shared compute infrastructure for pystatengine.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
"""

from pystatengine.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
