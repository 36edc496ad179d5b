"""
Regression backends.

Available backends:
    CPURegressionBackend: closed-form simple fit and normal equations
"""

from pystatengine.regression.backends.cpu import CPURegressionBackend

__all__ = [
    "CPURegressionBackend",
]
