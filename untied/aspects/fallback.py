"""
Bounder / Switcher Aspect
=========================

Switches to a different algorithm once a predicate over the input holds.

When the predicate is true, the base function computes the result directly:
the wrapped untied function is not called and no further recursion happens
through this call. The base function never sees ``recurse``, so it must be
total on the inputs the predicate admits.

Typical uses:
  - terminate a recursion that has no base case of its own
    (``bound(1, identity)`` on ``fib_unbounded``)
  - approximate a computation below a threshold
    (``bound(4, identity)`` gives a cheaper, approximate Fibonacci)
  - switch to an algorithm that is faster on small inputs
    (merge sort falling back to insertion sort for short lists)
"""

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from untied.core.fixpoint import Aspect, UntiedFunction, WRAPPER_ASSIGNMENTS

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]
BaseFunction = Callable[[Any], Any]


@dataclass
class FallbackEvent:
    """Record of one call answered by the base function."""
    func_name: str
    base_name: str
    args_repr: str

    def __str__(self):
        return f"Fallback[{self.func_name}]: called {self.base_name} with {self.args_repr}"


def _check_callable(value: Any, what: str):
    if not callable(value):
        raise TypeError(f"{what} must be callable, got {type(value).__name__}")


def with_fallback(
    predicate: Predicate,
    base: BaseFunction,
    on_fallback: Optional[Callable[[Any], Any]] = None,
) -> Aspect:
    """
    Build an aspect that answers ``base(x)`` whenever ``predicate(x)`` holds.

    Args:
        predicate: Decides per input whether to bypass the untied function
        base: Total function used instead of the untied function
        on_fallback: Optional observer called with the input before ``base``

    Errors raised by ``predicate`` or ``base`` propagate unchanged.
    """
    _check_callable(predicate, "predicate")
    _check_callable(base, "base")
    if on_fallback is not None:
        _check_callable(on_fallback, "on_fallback")

    def aspect(u: UntiedFunction) -> UntiedFunction:
        @functools.wraps(u, assigned=WRAPPER_ASSIGNMENTS, updated=())
        def switched(recurse, x):
            if predicate(x):
                if on_fallback is not None:
                    on_fallback(x)
                return base(x)
            return u(recurse, x)

        return switched

    return aspect


def bound(n: Any, base: BaseFunction) -> Aspect:
    """Use ``base`` for every input at or below ``n``."""
    return with_fallback(lambda x: x <= n, base)


def switch(
    predicate: Predicate,
    base: BaseFunction,
    events: Optional[List[FallbackEvent]] = None,
) -> Aspect:
    """
    Like ``with_fallback``, but reports each switch to the base function.

    Every switch is logged at INFO level and, if ``events`` is given, a
    ``FallbackEvent`` is appended to it. Results are not affected.
    """
    _check_callable(predicate, "predicate")
    _check_callable(base, "base")
    base_name = getattr(base, '__qualname__', repr(base))

    def make(u: UntiedFunction) -> UntiedFunction:
        func_name = getattr(u, '__qualname__', repr(u))

        def report(x):
            event = FallbackEvent(
                func_name=func_name,
                base_name=base_name,
                args_repr=repr(x)[:80],
            )
            logger.info(f"Calling base function: {event}")
            if events is not None:
                events.append(event)

        return with_fallback(predicate, base, on_fallback=report)(u)

    return make
