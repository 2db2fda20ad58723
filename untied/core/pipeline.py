"""
Composition Pipeline
====================

Applies an ordered list of aspects to an untied function, then ties it.

Aspects are applied strictly left-to-right, so

    pipe(u, a, b, c) == fix(c(b(a(u))))

The aspect applied last is the outermost wrapper and sees each call first.
Order is observable: with ``memo`` before ``log(sink)`` the sink sees every
call, cache hits included; with ``log(sink)`` before ``memo`` it sees only
cache misses. Mixed stacks follow mechanically from this rule.

A ``Pipeline`` is an immutable, reusable recipe. Aspect state (caches,
histories) is created when the pipeline is applied, so two functions tied
from the same pipeline never share a cache.
"""

import logging
from typing import List, Optional, Tuple

from untied.core.fixpoint import Aspect, RecursiveFunction, UntiedFunction, fix

logger = logging.getLogger(__name__)


def compose(*aspects: Aspect) -> Aspect:
    """Compose aspects left-to-right into a single aspect."""
    for aspect in aspects:
        if not callable(aspect):
            raise TypeError(f"aspect must be callable, got {type(aspect).__name__}")

    def composed(u: UntiedFunction) -> UntiedFunction:
        for aspect in aspects:
            u = aspect(u)
        return u

    return composed


def pipe(u: UntiedFunction, *aspects: Aspect, max_depth: Optional[int] = None) -> RecursiveFunction:
    """Apply ``aspects`` to ``u`` left-to-right and tie the result."""
    return fix(compose(*aspects)(u), max_depth=max_depth)


class Pipeline:
    """
    Ordered stack of aspects applied before tying.

    Usage:
        >>> calls = []
        >>> pipeline = Pipeline(memo, log(calls.append))
        >>> fib = pipeline.tie(fib_untied)
        >>> fib(10)
        55

        >>> # Pipelines are immutable; then() returns an extended copy
        >>> guarded = pipeline.then(bound(1, identity))
        >>> len(guarded)
        3

    Configuration is by keyword argument; ``DEFAULT_MAX_DEPTH`` applies when
    no ``max_depth`` is given.
    """

    DEFAULT_MAX_DEPTH: Optional[int] = None

    def __init__(
        self,
        *aspects: Aspect,
        max_depth: Optional[int] = None,
        name: Optional[str] = None,
        enable_logging: bool = False,
    ):
        for aspect in aspects:
            if not callable(aspect):
                raise TypeError(f"aspect must be callable, got {type(aspect).__name__}")
        if max_depth is None:
            max_depth = self.DEFAULT_MAX_DEPTH
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be at least 1")

        self._aspects: Tuple[Aspect, ...] = tuple(aspects)
        self.max_depth = max_depth
        self.name = name
        self.enable_logging = enable_logging

        if enable_logging:
            logging.basicConfig(level=logging.DEBUG)

    @property
    def aspects(self) -> Tuple[Aspect, ...]:
        return self._aspects

    def __len__(self) -> int:
        return len(self._aspects)

    def __repr__(self):
        return f"Pipeline({', '.join(self.describe())}, max_depth={self.max_depth})"

    def then(self, *aspects: Aspect) -> 'Pipeline':
        """Return a new pipeline with ``aspects`` applied after the current ones."""
        return Pipeline(
            *(self._aspects + aspects),
            max_depth=self.max_depth,
            name=self.name,
            enable_logging=self.enable_logging,
        )

    def apply(self, u: UntiedFunction) -> UntiedFunction:
        """Apply the aspects to ``u`` without tying."""
        return compose(*self._aspects)(u)

    def tie(self, u: UntiedFunction) -> RecursiveFunction:
        """Apply the aspects to ``u`` and tie the result."""
        label = self.name or getattr(u, '__qualname__', repr(u))
        logger.debug(f"Building pipeline {label} with {len(self._aspects)} aspect(s)")
        return fix(self.apply(u), max_depth=self.max_depth)

    __call__ = tie

    def describe(self) -> List[str]:
        """Aspect names, innermost first."""
        return [getattr(a, '__qualname__', repr(a)) for a in self._aspects]
