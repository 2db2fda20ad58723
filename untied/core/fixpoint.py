"""
Fixed-Point Tie
===============

Turns an *untied* function into an ordinary recursive function.

An untied function has the shape ``(recurse, x) -> y``: it computes the
result for ``x`` and, whenever it needs a recursive call, calls the
``recurse`` argument instead of naming itself. It is a template and cannot
recurse on its own.

``fix`` ties the knot. The tied function ``f`` is a closure that, when
called with ``x``, evaluates ``u(f, x)``, handing itself back in as the
recursive call:

    >>> @untied
    ... def fib(recurse, n):
    ...     return n if n < 2 else recurse(n - 1) + recurse(n - 2)
    >>> fib_tied = fix(fib)
    >>> [fib_tied(n) for n in range(8)]
    [0, 1, 1, 2, 3, 5, 8, 13]

The closure is built lazily, so there is no eager self-application. Each
call to ``f`` performs exactly one call to ``u``.

Depth Guard
-----------
By default no limit is imposed beyond the interpreter's own recursion limit.
Passing ``max_depth`` counts the nesting depth of ``f`` per thread and
raises ``RecursionLimitExceeded`` when a call would go deeper, which turns a
missing base case into a reported error rather than a stack overflow.
"""

import functools
import logging
import threading
from typing import Callable, Optional, TypeVar

In = TypeVar('In')
Out = TypeVar('Out')

UntiedFunction = Callable[[Callable[[In], Out], In], Out]
RecursiveFunction = Callable[[In], Out]
Aspect = Callable[[UntiedFunction], UntiedFunction]

logger = logging.getLogger(__name__)

WRAPPER_ASSIGNMENTS = ('__module__', '__name__', '__qualname__', '__doc__')


class RecursionLimitExceeded(RecursionError):
    """Raised when a tied function nests deeper than its ``max_depth``."""

    def __init__(self, depth: int, max_depth: int, name: str):
        self.depth = depth
        self.max_depth = max_depth
        self.name = name
        super().__init__(
            f"{name}: recursion depth {depth} exceeds maximum {max_depth} "
            f"(missing base case or unbounded input?)"
        )


def untied(func: Callable) -> UntiedFunction:
    """
    Mark an ordinary ``(recurse, x)`` function as an untied function.

    The function itself is returned unchanged apart from a marker
    attribute, so it can still be called directly with any ``recurse``.
    Callables that refuse new attributes, such as bound methods, are
    wrapped in a thin forwarding function that carries the marker.
    """
    if not callable(func):
        raise TypeError(f"untied function must be callable, got {type(func).__name__}")
    try:
        func.__untied_function__ = True
    except AttributeError:
        @functools.wraps(func, assigned=WRAPPER_ASSIGNMENTS, updated=())
        def forward(recurse, x):
            return func(recurse, x)

        forward.__untied_function__ = True
        return forward
    return func


def is_untied(func: Callable) -> bool:
    """True if ``func`` was declared with ``@untied``."""
    return getattr(func, '__untied_function__', False)


def _name_of(func: Callable) -> str:
    return getattr(func, '__qualname__', None) or repr(func)


def fix(u: UntiedFunction, max_depth: Optional[int] = None) -> RecursiveFunction:
    """
    Tie an untied function into a recursive one.

    Args:
        u: Untied function ``(recurse, x) -> y``
        max_depth: Optional maximum nesting depth of the tied function

    Returns:
        A function ``f`` with ``f(x) == u(f, x)``. Errors raised by ``u``
        propagate unchanged.
    """
    if not callable(u):
        raise TypeError(f"cannot tie non-callable {type(u).__name__}")
    if max_depth is not None and max_depth < 1:
        raise ValueError("max_depth must be at least 1")

    name = _name_of(u)

    if max_depth is None:
        def tied(x):
            return u(tied, x)
    else:
        local = threading.local()

        def tied(x):
            depth = getattr(local, 'depth', 0) + 1
            if depth > max_depth:
                raise RecursionLimitExceeded(depth, max_depth, name)
            local.depth = depth
            try:
                return u(tied, x)
            finally:
                local.depth = depth - 1

    functools.update_wrapper(tied, u, assigned=WRAPPER_ASSIGNMENTS, updated=())
    tied.__untied__ = u
    tied.max_depth = max_depth
    logger.debug(f"Tied {name} (max_depth={max_depth})")
    return tied


tie = fix
