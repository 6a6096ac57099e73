"""nextpipe: result-chaining combinators for flat, short-circuiting pipelines.

Public API:
    - Success / Failure: the two variants of a Result
    - next(), try_next(), ok(): run a step unless the value is a failure
    - on_error(): run a step only on failure
    - always(): run a step with the full result
    - next_while(): fold a sequence, stopping at the first failure
    - pipe() / stage(): compose the above left to right
    - config_scope(): scoped tracing and validation settings
"""

from __future__ import annotations

import logging

from nextpipe.combinators import (
    always,
    next,  # noqa: A004
    next_while,
    ok,
    on_error,
    try_next,
)
from nextpipe.config import (
    FrozenConfig,
    config_scope,
    current_config,
    reset_config_cache,
    resolve_config,
)
from nextpipe.core import Failure, Result, Success, is_result
from nextpipe.errors import ConfigurationError, InvalidResultError, NextPipeError
from nextpipe.pipe import pipe, stage

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("nextpipe")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("nextpipe").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "Failure",
    "FrozenConfig",
    "InvalidResultError",
    "NextPipeError",
    "Result",
    "Success",
    "__version__",
    "always",
    "config_scope",
    "current_config",
    "is_result",
    "next",
    "next_while",
    "ok",
    "on_error",
    "pipe",
    "reset_config_cache",
    "resolve_config",
    "stage",
    "try_next",
]
