"""
Untied Benchmark Suite
======================

Compares pipelines built from the same untied functions:

  1. Naive tied Fibonacci vs. memoized vs. bounded approximation
  2. Plain merge sort vs. merge sort switching to insertion sort
  3. Overhead of each aspect layer on a memoized Fibonacci

Run with ``python benchmarks/bench_untied.py``.
"""

import random
import sys

from tabulate import tabulate

from untied import bound, log, memo, successive, switch
from untied.examples import (
    fib_unbounded,
    fib_untied,
    identity,
    insertion_sort,
    is_small,
    merge_sort_untied,
)
from untied.utils.helpers import comparison_rows, measure

RESULT_HEADERS = ["Result", "Calls", "Best", "Speedup"]


def bench_fibonacci(n: int = 24):
    return comparison_rows([
        measure("naive", fib_untied, n),
        measure("memo (fresh cache)", fib_untied, n, memo),
        measure("bound(1, identity)", fib_unbounded, n, bound(1, identity)),
        measure("bound(4, identity)", fib_unbounded, n, bound(4, identity)),
    ])


def bench_sorting(size: int = 2000, threshold: int = 16):
    rng = random.Random(42)
    data = [rng.randint(-10_000, 10_000) for _ in range(size)]

    rows = comparison_rows([
        measure("merge sort", merge_sort_untied, data),
        measure(f"merge -> insertion (<{threshold})", merge_sort_untied, data,
                switch(is_small(threshold), insertion_sort)),
    ])
    # sorted lists are too long for a table cell
    return [(label, calls, best, speedup) for label, _, calls, best, speedup in rows]


def bench_aspect_overhead(n: int = 100):
    def discard(_):
        pass

    return comparison_rows([
        measure("memo", fib_untied, n, memo),
        measure("memo + log", fib_untied, n, memo, log(discard)),
        measure("log + memo", fib_untied, n, log(discard), memo),
        # a seeded pair input, as seed() would pass it
        measure("successive + memo", fib_untied, (n, n), successive, memo),
    ])


def main():
    """Main entry point."""
    print("Untied Benchmark Suite")
    print(f"Python {sys.version}")
    print()

    print(tabulate(bench_fibonacci(), headers=["Fibonacci(24)"] + RESULT_HEADERS))
    print()
    print(tabulate(bench_sorting(), headers=["Sort 2000 ints", "Calls", "Best", "Speedup"]))
    print()
    print(tabulate(bench_aspect_overhead(), headers=["Fibonacci(100) stack"] + RESULT_HEADERS))


if __name__ == '__main__':
    main()
