"""
Logger Aspect
=============

Records every call that reaches the aspect's position in a pipeline.

The sink is invoked with the call's input *before* the wrapped function
runs, so failing calls are still recorded as attempts. Calls answered by an
aspect applied after this one (a memoizer hit, a fallback) never reach the
sink.
"""

import functools
from typing import Any, Callable

from untied.core.fixpoint import Aspect, UntiedFunction, WRAPPER_ASSIGNMENTS

Sink = Callable[[Any], Any]


def with_logging(sink: Sink) -> Aspect:
    """
    Build an aspect that reports each call's input to ``sink``.

    Usage:
        >>> calls = []
        >>> fib_logged = pipe(fib_untied, with_logging(calls.append))
        >>> fib_logged(3)
        2
        >>> calls
        [3, 2, 1, 0, 1]
    """
    if not callable(sink):
        raise TypeError(f"sink must be callable, got {type(sink).__name__}")

    def aspect(u: UntiedFunction) -> UntiedFunction:
        @functools.wraps(u, assigned=WRAPPER_ASSIGNMENTS, updated=())
        def logged(recurse, x):
            sink(x)
            return u(recurse, x)

        return logged

    aspect.__qualname__ = f"with_logging({getattr(sink, '__qualname__', repr(sink))})"
    return aspect


log = with_logging
