from __future__ import annotations

import pytest

from nextpipe.errors import (
    ConfigurationError,
    InvalidResultError,
    NextPipeError,
)

pytestmark = pytest.mark.unit


def test_hint_is_appended_to_message() -> None:
    err = NextPipeError("boom", hint="do this")

    assert err.hint == "do this"
    assert str(err) == "boom. do this"
    assert err.args == ("boom",)


def test_hint_defaults_to_none() -> None:
    err = NextPipeError("fail")
    assert err.hint is None
    assert str(err) == "fail"


def test_invalid_result_error_structured_metadata() -> None:
    err = InvalidResultError("bad", combinator="next", value=42, hint="wrap it")

    assert err.combinator == "next"
    assert err.value == 42
    assert str(err) == "bad. wrap it"


def test_subclass_hierarchy() -> None:
    """Library errors are catchable as NextPipeError."""
    assert issubclass(InvalidResultError, NextPipeError)
    assert issubclass(ConfigurationError, NextPipeError)
    assert not issubclass(NextPipeError, (ValueError, TypeError))
