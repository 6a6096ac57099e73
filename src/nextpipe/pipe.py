"""Left-to-right composition for combinator pipelines.

Python has no pipe operator, so ``pipe`` threads a value through a series
of one-argument stages and ``stage`` binds a combinator to its callback:

    pipe(
        Success("zero"),
        stage(next, parse),
        stage(try_next, fetch),
        stage(on_error, fallback),
    )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


def stage(
    combinator: Callable[..., Any], *args: Any, **kwargs: Any
) -> Callable[[Any], Any]:
    """Bind everything but the pipeline value to ``combinator``.

    ``stage(try_next, fetch, rescue)`` returns a callable equivalent to
    ``lambda result: try_next(result, fetch, rescue)``.
    """

    def _stage(value: Any) -> Any:
        return combinator(value, *args, **kwargs)

    _stage.__qualname__ = f"stage({getattr(combinator, '__name__', combinator)!s})"
    return _stage


def pipe(value: Any, *stages: Callable[[Any], Any]) -> Any:
    """Feed ``value`` through ``stages`` in order and return the last output."""
    for fn in stages:
        value = fn(value)
    return value


__all__ = ["pipe", "stage"]
