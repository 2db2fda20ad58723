"""
Tests for the composition pipeline.

Validates:
  - Left-to-right application order
  - Observable difference between logging outside and inside the memoizer
  - Pipeline immutability and per-tie aspect state
  - Configuration (max_depth, enable_logging)
"""

import logging

import pytest

from untied.aspects.fallback import bound
from untied.aspects.history import seed, successive
from untied.aspects.logger import log
from untied.aspects.memoize import memo
from untied.core.fixpoint import RecursionLimitExceeded, untied
from untied.core.pipeline import Pipeline, compose, pipe
from untied.examples import fib_unbounded, fib_untied, identity


def tagging(tag, trace):
    """Aspect appending ``tag`` to ``trace`` on every call."""
    def aspect(u):
        def wrapped(recurse, x):
            trace.append(tag)
            return u(recurse, x)
        return wrapped
    return aspect


class TestCompose:
    def test_left_to_right(self):
        trace = []
        f = pipe(untied(lambda recurse, x: x), tagging('a', trace), tagging('b', trace))
        f(0)
        # the last aspect applied is the outermost wrapper
        assert trace == ['b', 'a']

    def test_compose_equals_nested_application(self):
        trace_1, trace_2 = [], []
        u = untied(lambda recurse, x: x)
        composed = compose(tagging(1, trace_1), tagging(2, trace_1))(u)
        nested = tagging(2, trace_2)(tagging(1, trace_2)(u))
        composed(None, 0)
        nested(None, 0)
        assert trace_1 == trace_2 == [2, 1]

    def test_empty_compose_is_identity(self):
        assert compose()(fib_untied) is fib_untied

    def test_rejects_non_callable_aspect(self):
        with pytest.raises(TypeError):
            compose(memo, "log")


class TestOrderSensitivity:
    """Logging outside vs. inside the memoizer."""

    def test_logger_outside_memo_logs_cache_hits(self):
        calls = []
        fib = pipe(fib_untied, memo, log(calls.append))
        fib(5)
        first = len(calls)
        fib(5)
        assert first == 9
        assert len(calls) - first == 1

    def test_logger_inside_memo_skips_cache_hits(self):
        calls = []
        fib = pipe(fib_untied, log(calls.append), memo)
        fib(5)
        first = len(calls)
        fib(5)
        assert first == 6
        assert len(calls) - first == 0

    def test_repeated_sweep(self):
        outside, inside = [], []
        fib_ml = pipe(fib_untied, memo, log(outside.append))
        fib_lm = pipe(fib_untied, log(inside.append), memo)

        for fib, calls in ((fib_ml, outside), (fib_lm, inside)):
            assert [fib(n) for n in range(6)] == [0, 1, 1, 2, 3, 5]
            calls.clear()
            assert [fib(n) for n in range(6)] == [0, 1, 1, 2, 3, 5]

        assert outside == [0, 1, 2, 3, 4, 5]
        assert inside == []

    def test_logged_inputs_inside_memo_are_distinct(self):
        calls = []
        fib = pipe(fib_untied, log(calls.append), memo)
        fib(12)
        assert sorted(calls) == list(range(13))

    def test_bound_outside_memo_never_fills_cache_below_bound(self):
        memoized = []

        def remember(u):
            m = memo(u)
            memoized.append(m)
            return m

        fib = pipe(fib_unbounded, remember, bound(1, identity))
        assert fib(6) == 8
        assert min(memoized[0].cache) == 2


class TestPipeline:
    def test_tie(self):
        fib = Pipeline(memo).tie(fib_untied)
        assert fib(50) == 12586269025

    def test_call_is_tie(self):
        fib = Pipeline(memo)(fib_untied)
        assert fib(10) == 55

    def test_empty_pipeline(self):
        fib = Pipeline()(fib_untied)
        assert fib(10) == 55

    def test_then_is_immutable(self):
        base = Pipeline(memo)
        extended = base.then(log(print))
        assert len(base) == 1
        assert len(extended) == 2
        assert extended.aspects[0] is memo

    def test_then_keeps_configuration(self):
        base = Pipeline(max_depth=7, name="fib")
        extended = base.then(memo)
        assert extended.max_depth == 7
        assert extended.name == "fib"

    def test_then_keeps_logging_flag(self, monkeypatch):
        configured = []
        monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: configured.append(kwargs))
        extended = Pipeline(memo, enable_logging=True).then(log(print))
        assert extended.enable_logging is True
        assert configured == [{'level': logging.DEBUG}] * 2
        assert Pipeline(memo).then(memo).enable_logging is False

    def test_fresh_state_per_tie(self):
        calls = []
        pipeline = Pipeline(log(calls.append), memo)
        first = pipeline.tie(fib_untied)
        second = pipeline.tie(fib_untied)
        first(5)
        calls.clear()
        second(5)
        assert len(calls) == 6

    def test_apply_returns_untied(self):
        applied = Pipeline(memo).apply(fib_untied)
        assert applied(lambda n: 0, 1) == 1
        assert applied(lambda n: 10, 5) == 20

    def test_tracker_pipeline(self):
        pairs = []
        fib = seed(Pipeline(successive, log(pairs.append)).tie(fib_untied))
        assert fib(4) == 3
        assert pairs[0] == (4, 4)

    def test_max_depth(self):
        runaway = Pipeline(max_depth=20).tie(fib_unbounded)
        with pytest.raises(RecursionLimitExceeded):
            runaway(5)

    def test_default_max_depth(self, monkeypatch):
        monkeypatch.setattr(Pipeline, 'DEFAULT_MAX_DEPTH', 30)
        assert Pipeline().max_depth == 30
        assert Pipeline(max_depth=5).max_depth == 5

    def test_invalid_max_depth(self):
        with pytest.raises(ValueError):
            Pipeline(max_depth=0)

    def test_rejects_non_callable_aspect(self):
        with pytest.raises(TypeError):
            Pipeline(memo, 3)

    def test_describe_and_repr(self):
        pipeline = Pipeline(successive, memo)
        assert pipeline.describe()[0] == 'successive'
        assert 'Memoizer' in repr(pipeline)

    def test_debug_logging(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='untied'):
            Pipeline(memo, name="fib").tie(fib_untied)
        messages = [r.getMessage() for r in caplog.records]
        assert any('Building pipeline fib' in m for m in messages)
        assert any(m.startswith('Tied fib_untied') for m in messages)
