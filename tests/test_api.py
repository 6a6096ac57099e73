"""Public API surface tests."""

from __future__ import annotations

import logging

import pytest

import nextpipe

pytestmark = [pytest.mark.unit, pytest.mark.smoke]


def test_public_names_are_exported() -> None:
    for name in nextpipe.__all__:
        assert hasattr(nextpipe, name), name


def test_combinators_are_plain_functions() -> None:
    for name in ("next", "try_next", "on_error", "always", "ok", "next_while"):
        assert callable(getattr(nextpipe, name))


def test_builtin_next_is_not_clobbered_for_importers() -> None:
    """Importing the package leaves the builtin alone in caller namespaces."""
    assert next(iter([1])) == 1
    assert nextpipe.next is not next


def test_library_logger_has_null_handler() -> None:
    handlers = logging.getLogger("nextpipe").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_version_is_a_string() -> None:
    assert isinstance(nextpipe.__version__, str)
    assert nextpipe.__version__
