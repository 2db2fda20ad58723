"""
Core: the fixed-point tie and the composition pipeline.
"""

from untied.core.fixpoint import (
    Aspect,
    RecursionLimitExceeded,
    RecursiveFunction,
    UntiedFunction,
    fix,
    is_untied,
    tie,
    untied,
)
from untied.core.pipeline import Pipeline, compose, pipe

__all__ = [
    'Aspect',
    'RecursionLimitExceeded',
    'RecursiveFunction',
    'UntiedFunction',
    'fix',
    'is_untied',
    'tie',
    'untied',
    'Pipeline',
    'compose',
    'pipe',
]
