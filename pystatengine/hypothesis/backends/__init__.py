"""
Hypothesis test backends.

Available backends:
    CPUHypothesisBackend: CPU reference implementation for every test
"""

from pystatengine.hypothesis.backends.cpu import CPUHypothesisBackend

__all__ = [
    "CPUHypothesisBackend",
]
