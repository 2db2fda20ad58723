"""
Timing helpers for tied pipelines.

Every timed run ties a fresh pipeline, so aspects with state (the memoizer's
cache in particular) start empty each time and the timing includes filling
them. Call counts come from one extra, untimed run with a counting layer
outermost, which keeps the counter's overhead out of the timings.

Usage:
    >>> naive = measure("naive", fib_untied, 20)
    >>> cached = measure("memo", fib_untied, 20, memo)
    >>> naive.calls, cached.calls
    (21891, 39)
    >>> cached.speedup_over(naive)
    '...x faster'
"""

import time
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from untied.aspects.logger import with_logging
from untied.core.fixpoint import Aspect, UntiedFunction
from untied.core.pipeline import pipe

_UNITS = (
    (1_000_000_000, "s", 3),
    (1_000_000, "ms", 2),
    (1_000, "µs", 1),
)


@dataclass
class Measurement:
    """Outcome of timing one pipeline on one input."""
    label: str
    result: Any
    best_ns: int
    calls: int

    def speedup_over(self, baseline: 'Measurement') -> str:
        if self.best_ns <= 0:
            return "∞x"
        ratio = baseline.best_ns / self.best_ns
        if ratio >= 1:
            return f"{ratio:.2f}x faster"
        return f"{1 / ratio:.2f}x slower"


def count_calls(u: UntiedFunction, x: Any, *aspects: Aspect) -> Tuple[Any, int]:
    """Evaluate a fresh ``pipe(u, *aspects)`` on ``x``; return result and call count."""
    calls = [0]

    def bump(_):
        calls[0] += 1

    result = pipe(u, *aspects, with_logging(bump))(x)
    return result, calls[0]


def measure(
    label: str,
    u: UntiedFunction,
    x: Any,
    *aspects: Aspect,
    repeat: int = 5,
    max_depth: Optional[int] = None,
) -> Measurement:
    """Best time of ``repeat`` runs, each on a freshly tied pipeline."""
    if repeat < 1:
        raise ValueError(f"repeat must be >= 1, got {repeat}")

    best = None
    for _ in range(repeat):
        f = pipe(u, *aspects, max_depth=max_depth)
        start = time.perf_counter_ns()
        f(x)
        elapsed = time.perf_counter_ns() - start
        if best is None or elapsed < best:
            best = elapsed

    result, calls = count_calls(u, x, *aspects)
    return Measurement(label=label, result=result, best_ns=best, calls=calls)


def comparison_rows(measurements: Sequence[Measurement]) -> List[tuple]:
    """Rows of (label, result, calls, best, speedup) against the first entry."""
    if not measurements:
        return []
    baseline = measurements[0]
    rows = [(baseline.label, baseline.result, baseline.calls, format_ns(baseline.best_ns), "-")]
    for m in measurements[1:]:
        rows.append((m.label, m.result, m.calls, format_ns(m.best_ns), m.speedup_over(baseline)))
    return rows


def format_ns(ns: float) -> str:
    for scale, unit, digits in _UNITS:
        if ns >= scale:
            return f"{ns / scale:.{digits}f} {unit}"
    return f"{ns:.0f} ns"
