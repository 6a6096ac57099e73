# src/nextpipe/config/core.py

"""Configuration schema and resolution for nextpipe.

Resolve once, freeze, then flow:
- ``Settings`` is the pydantic schema wall (fields, defaults, coercion)
- ``FrozenConfig`` is the immutable payload the combinators read
- ``config_scope`` installs a config for a block via a context variable
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from enum import Enum
from functools import cache
import logging
from typing import TYPE_CHECKING, Any, Literal, overload

from pydantic import BaseModel, ConfigDict, ValidationError

from nextpipe.errors import HINTS, ConfigurationError

from .loaders import env_key_for, load_env, load_pyproject

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Pydantic schema for configuration validation and defaults.

    Boolean fields accept the usual string spellings (``"1"``, ``"true"``,
    ``"on"``...) so environment values validate without pre-coercion.
    """

    model_config = ConfigDict(extra="forbid")

    #: Emit DEBUG records for each dispatch decision.
    trace: bool = False
    #: Check that callbacks return ``Success``/``Failure``.
    validate_results: bool = False
    #: Log exceptions rescued by ``try_next`` (DEBUG, with traceback).
    log_rescues: bool = False


@cache
def _default_settings() -> dict[str, Any]:
    return Settings().model_dump()


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration read by the combinators."""

    trace: bool = False
    validate_results: bool = False
    log_rescues: bool = False


# --- Audit types ---


class Origin(str, Enum):
    """Source origin for configuration field values."""

    DEFAULT = "default"
    PROJECT = "project"
    ENV = "env"
    OVERRIDES = "overrides"


SourceMap = dict[str, Origin]


# --- Public resolution API ---


@overload
def resolve_config(
    overrides: Mapping[str, Any] | None = ...,
    *,
    explain: Literal[True],
) -> tuple[FrozenConfig, SourceMap]: ...


@overload
def resolve_config(
    overrides: Mapping[str, Any] | None = ...,
    *,
    explain: Literal[False] = ...,
) -> FrozenConfig: ...


def resolve_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    explain: bool = False,
) -> FrozenConfig | tuple[FrozenConfig, SourceMap]:
    """Resolve configuration from all sources into a FrozenConfig.

    Precedence: defaults < ``[tool.nextpipe]`` in pyproject.toml <
    ``NEXTPIPE_*`` environment variables < overrides.

    Args:
        overrides: Programmatic configuration overrides.
        explain: If True, also return where each field value came from.

    Returns:
        FrozenConfig, or ``(FrozenConfig, SourceMap)`` when ``explain`` is set.

    Raises:
        ConfigurationError: If the merged values fail validation.
    """
    merged, sources = _resolve_layers(
        overrides=overrides or {},
        env=load_env(),
        project=load_pyproject(),
    )

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        raise _to_configuration_error(e, sources) from e

    frozen = FrozenConfig(**settings.model_dump())
    return (frozen, sources) if explain else frozen


def _resolve_layers(
    *,
    overrides: Mapping[str, Any],
    env: Mapping[str, Any],
    project: Mapping[str, Any],
) -> tuple[dict[str, Any], SourceMap]:
    """Merge layers with last-wins precedence, recording each field's origin."""
    out: dict[str, Any] = dict(_default_settings())
    src: SourceMap = dict.fromkeys(out, Origin.DEFAULT)

    for origin, payload in (
        (Origin.PROJECT, project),
        (Origin.ENV, env),
        (Origin.OVERRIDES, overrides),
    ):
        for k, v in payload.items():
            out[k] = v
            src[k] = origin

    return out, src


def _to_configuration_error(
    e: ValidationError, sources: SourceMap
) -> ConfigurationError:
    err = e.errors()[0]
    field = str(err["loc"][0]) if err.get("loc") else ""
    msg = err.get("msg", "invalid value")

    hint = None
    if field not in Settings.model_fields:
        hint = f"Known fields: {', '.join(sorted(Settings.model_fields))}"
    else:
        match sources.get(field):
            case Origin.ENV:
                hint = f"Check {env_key_for(field)}. {HINTS['invalid_env']}"
            case Origin.PROJECT:
                hint = f"Check '{field}' under [tool.nextpipe] in pyproject.toml"

    return ConfigurationError(
        f"Configuration validation failed for {field!r}: {msg}", hint=hint
    )


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "nextpipe_ambient_config", default=None
)


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: object,
) -> Generator[FrozenConfig]:
    """Run a block with a specific configuration.

    Scoping uses a context variable, so it is safe across threads and
    asyncio tasks and never touches global state.

    Args:
        cfg_or_overrides: A FrozenConfig to install as-is, or a mapping of
            overrides applied on top of normal resolution.
        **overrides: Additional overrides merged into ``cfg_or_overrides``.

    Yields:
        The FrozenConfig active inside the block.

    Example:
        with config_scope(trace=True):
            next(Success(1), step)
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        cfg = cfg_or_overrides
    else:
        cfg = resolve_config({**(cfg_or_overrides or {}), **overrides})

    token = _AMBIENT.set(cfg)
    try:
        yield cfg
    finally:
        _AMBIENT.reset(token)


@cache
def _environment_config() -> FrozenConfig:
    # Implicit lookups must never break a combinator call; explicit
    # resolve_config() and config_scope() stay strict.
    try:
        return resolve_config()
    except ConfigurationError as e:
        log.warning("Ignoring invalid nextpipe configuration, using defaults: %s", e)
        return FrozenConfig()


def current_config() -> FrozenConfig:
    """Return the scoped config, or the environment-resolved default.

    The default is resolved on first use and cached; call
    ``reset_config_cache()`` after changing ``NEXTPIPE_*`` variables. An
    invalid environment or pyproject table logs a warning and falls back
    to defaults instead of raising.
    """
    return _AMBIENT.get() or _environment_config()


def reset_config_cache() -> None:
    """Forget the cached environment-resolved default."""
    _environment_config.cache_clear()
