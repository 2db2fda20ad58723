"""
Observation sinks for the logger aspect.

A sink is any callable taking one record. The helpers here cover the
common cases: keeping records in memory, printing them, and forwarding
them to the ``logging`` module.
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional, Tuple


class CallRecorder:
    """
    Sink that keeps every record in call order.

    Usage:
        >>> recorder = CallRecorder()
        >>> pipe(fib_untied, log(recorder))(3)
        2
        >>> recorder.records
        [3, 2, 1, 0, 1]
        >>> recorder.pairs()
        [(3, 2), (2, 1), (1, 0), (0, 1)]
    """

    def __init__(self):
        self.records: List[Any] = []

    def __call__(self, record: Any):
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.records)

    def __repr__(self):
        return f"CallRecorder({len(self.records)} records)"

    def clear(self):
        self.records.clear()

    def pairs(self) -> List[Tuple[Any, Any]]:
        """Consecutive records as pairs."""
        return pairwise(self.records)

    def flatten(self) -> List[Any]:
        """Pair-shaped records flattened into one sequence."""
        return flatten_pairs(self.records)


def pairwise(records: Iterable[Any]) -> List[Tuple[Any, Any]]:
    """``[a, b, c] -> [(a, b), (b, c)]``"""
    items = list(records)
    return list(zip(items, items[1:]))


def flatten_pairs(pairs: Iterable[Tuple[Any, Any]]) -> List[Any]:
    """``[(a, b), (c, d)] -> [a, b, c, d]``"""
    return [item for pair in pairs for item in pair]


def printer(prefix: str = "Called with"):
    """Sink printing each record to stdout."""
    def sink(record: Any):
        print(f"{prefix} {record!r}")
    return sink


def logger_sink(
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    prefix: str = "Called with",
):
    """Sink forwarding each record to a ``logging.Logger``."""
    if logger is None:
        logger = logging.getLogger(__name__)

    def sink(record: Any):
        logger.log(level, f"{prefix} {record!r}")
    return sink


def level_printer(indent: str = " "):
    """Sink for ``(level, x)`` records, indenting by recursion level."""
    def sink(record: Tuple[int, Any]):
        level, value = record
        print(f"{indent * level}Called with: {value!r}")
    return sink
