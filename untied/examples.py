"""
Example untied functions used by the tests and benchmarks.
"""

from typing import Callable, List

from untied.core.fixpoint import untied


@untied
def fib_untied(fib, n: int) -> int:
    """Fibonacci with recursive calls routed through ``fib``."""
    if n < 0:
        raise ValueError(f"fib is undefined for negative input {n}")
    return n if n < 2 else fib(n - 1) + fib(n - 2)


@untied
def fib_unbounded(fib, n: int) -> int:
    """Fibonacci without a base case; only terminates under ``bound``."""
    return fib(n - 2) + fib(n - 1)


def identity(x):
    return x


def is_small(n: int) -> Callable[[list], bool]:
    """Predicate factory: list shorter than ``n``."""
    return lambda items: len(items) < n


def _merge(left: list, right: list) -> list:
    merged = []
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] < right[j]:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


@untied
def merge_sort_untied(sort, items: list) -> list:
    """Merge sort; the two halves are sorted through ``sort``."""
    if len(items) <= 1:
        return list(items)
    middle = (len(items) + 1) // 2
    return _merge(sort(items[:middle]), sort(items[middle:]))


def insertion_sort(items: list) -> list:
    """Plain insertion sort, usable as a base function for small inputs."""
    result: List = []
    for item in items:
        position = len(result)
        while position > 0 and result[position - 1] > item:
            position -= 1
        result.insert(position, item)
    return result
