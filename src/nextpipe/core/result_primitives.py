"""Result type for explicit success/failure flow.

Steps return ``Success`` or ``Failure`` instead of raising, which keeps
failures a predictable part of the data flow and lets the combinators
short-circuit without broad try/except blocks.
"""

from __future__ import annotations

import dataclasses
import typing

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure")


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A successful result carrying its payload."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(typing.Generic[TFailure]):
    """A failed result carrying its error payload.

    The payload is not restricted to exceptions: strings, tuples and domain
    objects are all valid errors.
    """

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


def is_result(obj: object) -> bool:
    """Return True when ``obj`` is a ``Success`` or ``Failure``."""
    return isinstance(obj, (Success, Failure))


__all__ = ["Failure", "Result", "Success", "is_result"]
