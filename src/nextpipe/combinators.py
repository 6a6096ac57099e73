"""Result-chaining combinators.

Each combinator takes the pipeline value first and a callback second, so a
pipeline reads top to bottom:

    result = next(raw, parse)
    result = try_next(result, fetch)
    result = on_error(result, fallback)

``Failure`` values short-circuit: ``next``, ``try_next`` and ``ok`` return
them unchanged without invoking their step. ``on_error`` is the mirror
image and only acts on failures, while ``always`` hands the full tagged
value to its callback regardless of variant.

Only ``try_next`` catches exceptions. Everywhere else an exception raised by
a callback propagates to the caller untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import logging
from typing import Any, overload

from nextpipe.config import current_config
from nextpipe.core.result_primitives import Failure, Result, Success, is_result
from nextpipe.errors import HINTS, InvalidResultError

log = logging.getLogger(__name__)

Step = Callable[[Any], "Result[Any, Any]"]
Rescue = Callable[[Any, Exception], "Result[Any, Any]"]


def _name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def _checked(combinator: str, out: Any) -> Any:
    """Enforce that a callback returned a Result when validation is enabled."""
    if current_config().validate_results and not is_result(out):
        raise InvalidResultError(
            f"{combinator}() callback returned {type(out).__name__}, not a Result",
            combinator=combinator,
            value=out,
            hint=HINTS["wrap_result"],
        )
    return out


def _rescue_with_failure(_value: Any, exc: Exception) -> Result[Any, Any]:
    return Failure(exc)


def next(value: Any, step: Step) -> Result[Any, Any]:  # noqa: A001
    """Call ``step`` with the pipeline value unless it is a failure.

    - ``Success(v)`` calls ``step(v)``.
    - ``Failure(e)`` is returned unchanged and ``step`` is skipped.
    - Any other value is treated as ``Success(value)``, which lets ``next``
      start a pipeline from a plain value.

    Args:
        value: A Result, or a bare value at the head of a pipeline.
        step: Callable returning ``Success`` or ``Failure``.

    Returns:
        Whatever ``step`` returned, or the incoming failure.
    """
    match value:
        case Failure():
            if current_config().trace:
                log.debug("next: skipping %s on failure", _name(step))
            return value
        case Success(value=payload):
            pass
        case _:
            payload = value

    if current_config().trace:
        log.debug("next: calling %s", _name(step))
    return _checked("next", step(payload))


def try_next(
    value: Any,
    step: Step,
    rescue: Rescue = _rescue_with_failure,
) -> Result[Any, Any]:
    """Like ``next``, but turn an exception raised by ``step`` into a result.

    When ``step`` raises, ``rescue(payload, exc)`` is called and its return
    value becomes the result. The default rescue returns ``Failure(exc)``.

    Only the call to ``step`` is guarded: an exception raised by ``rescue``
    propagates, and so does anything that is not an ``Exception``
    (``KeyboardInterrupt``, ``SystemExit``).
    """
    match value:
        case Failure():
            if current_config().trace:
                log.debug("try_next: skipping %s on failure", _name(step))
            return value
        case Success(value=payload):
            pass
        case _:
            payload = value

    cfg = current_config()
    if cfg.trace:
        log.debug("try_next: calling %s", _name(step))
    try:
        out = step(payload)
    except Exception as exc:
        if cfg.log_rescues:
            log.debug(
                "try_next: %s raised %s; rescuing with %s",
                _name(step),
                type(exc).__name__,
                _name(rescue),
                exc_info=exc,
            )
        return _checked("try_next", rescue(payload, exc))
    return _checked("try_next", out)


def on_error(value: Result[Any, Any], error_fn: Step) -> Result[Any, Any]:
    """Call ``error_fn`` with the error payload of a failure.

    Successes pass through unchanged. Unlike ``next``, a bare value is not
    accepted here because it cannot be told apart from a success.

    Raises:
        InvalidResultError: If ``value`` is not a Success or Failure.
    """
    match value:
        case Failure(error=error):
            if current_config().trace:
                log.debug("on_error: calling %s", _name(error_fn))
            return _checked("on_error", error_fn(error))
        case Success():
            if current_config().trace:
                log.debug("on_error: skipping %s on success", _name(error_fn))
            return value
        case _:
            raise InvalidResultError(
                f"on_error() expects a Result, got {type(value).__name__}",
                combinator="on_error",
                value=value,
                hint=HINTS["bare_on_error"],
            )


def always(value: Result[Any, Any], step: Step) -> Result[Any, Any]:
    """Call ``step`` with the full result, whatever its variant."""
    if current_config().trace:
        log.debug("always: calling %s", _name(step))
    return _checked("always", step(value))


@overload
def ok(value: Any) -> Result[Any, Any]: ...


@overload
def ok(value: Any, step: Step) -> Result[Any, Any]: ...


def ok(value: Any, step: Step | None = None) -> Result[Any, Any]:
    """Normalize a value into a Result, or chain like ``next``.

    With one argument, a bare value becomes ``Success(value)`` and an
    existing ``Success``/``Failure`` is returned as-is. With a step,
    ``ok(value, step)`` is exactly ``next(value, step)``.
    """
    if step is not None:
        return next(value, step)
    if is_result(value):
        return value
    return Success(value)


def next_while(
    items: Iterable[Any], step: Step
) -> Result[list[Any], tuple[Any, list[Any]]]:
    """Apply ``step`` to each item, stopping at the first failure.

    Results are accumulated most-recent-first, so the returned list is in
    reverse processing order: ``[1, 2, 3]`` with an identity step yields
    ``Success([3, 2, 1])``.

    Args:
        items: Items to process, consumed lazily in order.
        step: Callable returning ``Success`` or ``Failure`` for one item.

    Returns:
        ``Success(results)`` when every item succeeds, otherwise
        ``Failure((error, partial_results))`` for the first failure. Items
        after the failing one are never pulled from ``items``.

    Raises:
        InvalidResultError: If ``step`` returns something other than a Result.
    """
    acc: list[Any] = []
    trace = current_config().trace
    for index, item in enumerate(items):
        match step(item):
            case Success(value=result):
                acc.append(result)
            case Failure(error=error):
                if trace:
                    log.debug(
                        "next_while: %s failed at item %d; halting", _name(step), index
                    )
                acc.reverse()
                return Failure((error, acc))
            case other:
                raise InvalidResultError(
                    f"next_while() step returned {type(other).__name__}, not a Result",
                    combinator="next_while",
                    value=other,
                    hint=HINTS["wrap_result"],
                )
    acc.reverse()
    return Success(acc)


__all__ = ["always", "next", "next_while", "ok", "on_error", "try_next"]
