"""
Aspects
=======

Each aspect maps an untied function to a new untied function of the same
shape, injecting one cross-cutting behaviour. Applied before tying, the
behaviour is active at every level of recursion.

    - logger:   report each call's input to a sink
    - memo:     cache outputs by input
    - fallback: switch to a base function when a predicate holds
    - history:  carry the previous input (or the recursion level) along
"""

from untied.aspects.logger import log, with_logging
from untied.aspects.memoize import CacheInfo, Memoizer, memo, with_memo
from untied.aspects.fallback import FallbackEvent, bound, switch, with_fallback
from untied.aspects.history import (
    diag,
    init_with,
    seed,
    successive,
    tag_level,
    with_history,
    with_level,
)

__all__ = [
    'log',
    'with_logging',
    'CacheInfo',
    'Memoizer',
    'memo',
    'with_memo',
    'FallbackEvent',
    'bound',
    'switch',
    'with_fallback',
    'diag',
    'init_with',
    'seed',
    'successive',
    'tag_level',
    'with_history',
    'with_level',
]
