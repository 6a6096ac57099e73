# src/nextpipe/config/__init__.py

"""Configuration management for nextpipe.

Configuration is resolved at entry into an immutable FrozenConfig. The
combinators read it through ``current_config()``, which prefers a config
installed with ``config_scope`` over the environment-resolved default.

Key exports:
- resolve_config: Resolve defaults, pyproject, env and overrides
- FrozenConfig: Immutable configuration payload
- config_scope: Context manager for scoped configuration
- Settings: Pydantic schema for validation and defaults
"""

from .core import (
    FrozenConfig,
    Origin,
    Settings,
    SourceMap,
    config_scope,
    current_config,
    reset_config_cache,
    resolve_config,
)

__all__ = [
    "FrozenConfig",
    "Origin",
    "Settings",
    "SourceMap",
    "config_scope",
    "current_config",
    "reset_config_cache",
    "resolve_config",
]
