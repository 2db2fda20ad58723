"""
Untied: Open Recursion Combinators
==================================

Write a recursive function once, without naming itself, then decide
separately how it recurses. An *untied* function takes its recursive call
as a parameter; ``fix`` ties it into an ordinary recursive function, and
*aspects* composed before tying add behaviour to every recursive call.

Core Components:
    - core: the fixed-point tie and the composition pipeline
    - aspects: logging, memoization, fallback/switching, call history
    - sinks: recorders and printers for logged calls

Usage:
    >>> from untied import untied, pipe, memo, log, CallRecorder
    >>> @untied
    ... def fib(recurse, n):
    ...     return n if n < 2 else recurse(n - 1) + recurse(n - 2)
    >>> calls = CallRecorder()
    >>> fast_fib = pipe(fib, log(calls), memo)
    >>> fast_fib(30)
    832040
    >>> len(calls)   # each distinct input computed once
    31
"""

__version__ = "1.0.0"

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
from untied.aspects import (
    CacheInfo,
    FallbackEvent,
    Memoizer,
    bound,
    diag,
    init_with,
    log,
    memo,
    seed,
    successive,
    switch,
    tag_level,
    with_fallback,
    with_history,
    with_level,
    with_logging,
    with_memo,
)
from untied.sinks import (
    CallRecorder,
    flatten_pairs,
    level_printer,
    logger_sink,
    pairwise,
    printer,
)
