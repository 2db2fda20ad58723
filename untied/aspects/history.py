"""
Tracker Aspects
===============

Thread extra information alongside the input of every recursive call.

``successive`` carries the previous call's input. The wrapped function
takes a pair ``(previous, current)``, runs the untied function on
``current``, and turns each recursive call ``recurse(nxt)`` into
``recurse((current, nxt))``. An outer logger therefore sees, for every call,
both the argument that caused it and the argument it was made with:

    >>> pairs = []
    >>> fib = seed(pipe(fib_untied, successive, log(pairs.append)))
    >>> fib(3)
    2
    >>> pairs
    [(3, 3), (3, 2), (2, 1), (2, 0), (3, 1)]

The very first call has no predecessor, so ``seed`` duplicates the initial
input as its own predecessor.

``tag_level`` works the same way with a recursion level in place of the
previous input, starting from whatever ``init_with`` supplies.
"""

import functools
from typing import Any, Callable, Tuple

from untied.core.fixpoint import Aspect, RecursiveFunction, UntiedFunction, WRAPPER_ASSIGNMENTS


def successive(u: UntiedFunction) -> UntiedFunction:
    """Lift ``u`` to take ``(previous, current)`` pairs."""

    @functools.wraps(u, assigned=WRAPPER_ASSIGNMENTS, updated=())
    def tracked(recurse, pair: Tuple[Any, Any]):
        _, current = pair
        return u(lambda nxt: recurse((current, nxt)), current)

    return tracked


def with_history() -> Aspect:
    """Return the call-history tracking aspect."""
    return successive


def seed(f: RecursiveFunction) -> RecursiveFunction:
    """Start a pair-tracked function: ``seed(f)(x) == f((x, x))``."""

    @functools.wraps(f, assigned=WRAPPER_ASSIGNMENTS, updated=())
    def seeded(x):
        return f((x, x))

    return seeded


diag = seed


def tag_level(u: UntiedFunction) -> UntiedFunction:
    """Lift ``u`` to take ``(level, current)`` pairs, one level per recursion."""

    @functools.wraps(u, assigned=WRAPPER_ASSIGNMENTS, updated=())
    def leveled(recurse, tagged: Tuple[int, Any]):
        level, current = tagged
        return u(lambda nxt: recurse((level + 1, nxt)), current)

    return leveled


def with_level() -> Aspect:
    """Return the recursion-level tagging aspect."""
    return tag_level


def init_with(value: Any) -> Callable[[RecursiveFunction], RecursiveFunction]:
    """Fix the first component of a paired function: ``f(x) -> f((value, x))``."""

    def initialize(f: RecursiveFunction) -> RecursiveFunction:
        @functools.wraps(f, assigned=WRAPPER_ASSIGNMENTS, updated=())
        def initialized(x):
            return f((value, x))

        return initialized

    return initialize
