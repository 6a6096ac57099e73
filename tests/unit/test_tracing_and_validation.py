"""Opt-in behavior driven by configuration: tracing, rescue logs, validation."""

from __future__ import annotations

import logging

import pytest

import nextpipe as nx
from nextpipe import Failure, InvalidResultError, Success, config_scope

pytestmark = pytest.mark.unit

LOGGER = "nextpipe.combinators"


def parse(raw):
    return Success(int(raw))


def test_combinators_are_silent_by_default(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=LOGGER)

    nx.next(Success("1"), parse)
    nx.try_next(Success("x"), parse)

    assert caplog.records == []


def test_trace_logs_calls_and_skips(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=LOGGER)

    with config_scope(trace=True):
        nx.next(Success("1"), parse)
        nx.next(Failure("bad"), parse)
        nx.on_error(Success(1), parse)

    messages = [r.getMessage() for r in caplog.records]
    assert "next: calling parse" in messages
    assert "next: skipping parse on failure" in messages
    assert "on_error: skipping parse on success" in messages
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_trace_logs_next_while_halt(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=LOGGER)

    with config_scope(trace=True):
        nx.next_while([1, 2], lambda i: Failure(i) if i == 2 else Success(i))

    assert any("failed at item 1" in r.getMessage() for r in caplog.records)


def test_log_rescues_records_traceback(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=LOGGER)

    with config_scope(log_rescues=True):
        out = nx.try_next(Success("x"), parse)

    assert isinstance(out, Failure)
    [record] = caplog.records
    assert "ValueError" in record.getMessage()
    assert record.exc_info is not None
    assert record.exc_info[1] is out.error


@pytest.mark.parametrize(
    "call",
    [
        lambda step: nx.next(Success(1), step),
        lambda step: nx.try_next(Success(1), step),
        lambda step: nx.ok(1, step),
        lambda step: nx.on_error(Failure(1), step),
        lambda step: nx.always(Success(1), step),
    ],
)
def test_validation_rejects_bare_callback_output(call) -> None:
    with config_scope(validate_results=True), pytest.raises(InvalidResultError) as exc:
        call(lambda _v: "bare")

    assert exc.value.value == "bare"
    assert "Success(value)" in str(exc.value)


def test_validation_off_trusts_callbacks() -> None:
    assert nx.next(Success(1), lambda v: v + 1) == 2


def test_validation_is_not_rescued_by_try_next() -> None:
    """An invalid return value is a programming error, not a step fault."""
    with config_scope(validate_results=True), pytest.raises(InvalidResultError):
        nx.try_next(Success(1), lambda v: v)


def test_validation_checks_rescue_output() -> None:
    def boom(_):
        raise RuntimeError("step")

    with config_scope(validate_results=True), pytest.raises(InvalidResultError):
        nx.try_next(Success(1), boom, lambda _v, _e: "not a result")
