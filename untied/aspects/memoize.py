"""
Memoizer Aspect
===============

Caches computed outputs keyed by input, at every level of recursion.

Because the cache wraps the untied function rather than the tied one, the
recursive calls made inside a computation also go through the cache. A
memoized Fibonacci therefore evaluates each ``fib(k)`` once, instead of the
exponential number of times the naive recursion would.

Cache Semantics
---------------
- Each application of the aspect creates a fresh, private cache.
- A key is inserted only after its computation succeeds, and at most once.
  Stored values are never replaced and there is no invalidation.
- Keys must be hashable and keep a stable hash and equality while cached.
  Mutating a key after insertion is undefined behaviour.

Position Matters
----------------
Aspects applied *after* the memoizer (outer) still see every call, cache
hits included. Aspects applied *before* it (inner) are skipped entirely on a
hit:

    pipe(fib_untied, memo, log(sink))   # sink sees every call
    pipe(fib_untied, log(sink), memo)   # sink sees only cache misses

Thread Safety
-------------
With ``thread_safe=True`` (the default) a short lock guards only the lookup
and the insert. The computation itself runs unlocked. The first thread to
miss on a key owns it and publishes the result through a
``concurrent.futures.Future``; other threads asking for that key wait on the
future instead of computing it again. A failed computation drops its
in-flight entry, so nothing is cached and waiters see the same exception.
Because no lock is held across ``u``, recursion may hop between threads
(mutually recursive memoized functions called from several threads, or
sub-calls handed to an executor) without deadlocking.
"""

import functools
import threading
import types
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from untied.core.fixpoint import Aspect, UntiedFunction, WRAPPER_ASSIGNMENTS


@dataclass
class CacheInfo:
    """Statistics for one memoizer cache."""
    hits: int = 0
    misses: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class Memoizer:
    """
    Aspect factory adding memoization to untied functions.

    A single ``Memoizer`` can be applied to many untied functions; each
    application gets its own cache. The memoized untied function exposes
    ``cache_info()`` and a read-only ``cache`` view.

    Usage:
        >>> memoized = Memoizer()(fib_untied)
        >>> fib = fix(memoized)
        >>> fib(30)
        832040
        >>> memoized.cache_info()
        CacheInfo(hits=28, misses=31, size=31)
    """

    def __init__(self, thread_safe: bool = True):
        self.thread_safe = thread_safe

    def __call__(self, u: UntiedFunction) -> UntiedFunction:
        if not self.thread_safe:
            return self._plain(u)

        cache: Dict[Any, Any] = {}
        info = CacheInfo()
        lock = threading.Lock()
        # key -> (owning thread id, future resolved when the owner finishes)
        in_flight: Dict[Any, Tuple[int, Future]] = {}

        @functools.wraps(u, assigned=WRAPPER_ASSIGNMENTS, updated=())
        def memoized(recurse, x):
            me = threading.get_ident()
            with lock:
                try:
                    result = cache[x]
                except KeyError:
                    pass
                else:
                    info.hits += 1
                    return result

                pending = in_flight.get(x)
                if pending is None:
                    pending = (me, Future())
                    in_flight[x] = pending
                    info.misses += 1
                    owner = True
                else:
                    owner = False

            if not owner:
                owner_ident, future = pending
                if owner_ident == me:
                    # x depends on itself: recurse uncached, as the bare function would
                    return u(recurse, x)
                result = future.result()
                with lock:
                    info.hits += 1
                return result

            future = pending[1]
            try:
                result = u(recurse, x)
            except BaseException as exc:
                with lock:
                    del in_flight[x]
                future.set_exception(exc)
                raise
            with lock:
                result = cache.setdefault(x, result)
                del in_flight[x]
            future.set_result(result)
            return result

        memoized.cache = types.MappingProxyType(cache)
        memoized.cache_info = lambda: CacheInfo(info.hits, info.misses, len(cache))
        return memoized

    def _plain(self, u: UntiedFunction) -> UntiedFunction:
        cache: Dict[Any, Any] = {}
        info = CacheInfo()

        @functools.wraps(u, assigned=WRAPPER_ASSIGNMENTS, updated=())
        def memoized(recurse, x):
            try:
                result = cache[x]
            except KeyError:
                pass
            else:
                info.hits += 1
                return result

            info.misses += 1
            result = u(recurse, x)
            # a nested call for the same key may have finished first
            return cache.setdefault(x, result)

        memoized.cache = types.MappingProxyType(cache)
        memoized.cache_info = lambda: CacheInfo(info.hits, info.misses, len(cache))
        return memoized

    def __repr__(self):
        return f"Memoizer(thread_safe={self.thread_safe})"


def with_memo(thread_safe: bool = True) -> Aspect:
    """Build a memoization aspect; every application owns a fresh cache."""
    return Memoizer(thread_safe=thread_safe)


memo = with_memo()
