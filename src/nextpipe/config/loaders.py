# src/nextpipe/config/loaders.py

"""Configuration loaders for environment and project files.

Pure data loading: each loader returns a plain dictionary that the core
resolver merges and validates. No validation or type conversion beyond
whitespace trimming happens here; the pydantic schema owns coercion.
"""

from __future__ import annotations

import os
from pathlib import Path
import tomllib
from typing import Any

# --- Constants ---

CONFIG_TOOL_NAME = "nextpipe"
ENV_PREFIX = "NEXTPIPE_"
PYPROJECT_PATH_VAR = "NEXTPIPE_PYPROJECT_PATH"

# Meta/control variables that steer resolution but aren't config fields
META_ENV_FIELDS = {"pyproject_path"}


def get_pyproject_path() -> Path:
    """Return the project pyproject.toml path, honoring the env override."""
    override = os.environ.get(PYPROJECT_PATH_VAR)
    if override:
        return Path(override).expanduser()
    return Path.cwd() / "pyproject.toml"


def env_key_for(field: str) -> str:
    """Return the environment variable that feeds ``field``."""
    return f"{ENV_PREFIX}{field.upper()}"


# --- Environment Loading ---


def load_env() -> dict[str, Any]:
    """Load configuration from ``NEXTPIPE_*`` environment variables.

    Only variables naming a known schema field are collected; anything else
    under the prefix is ignored so unrelated tooling can share it.
    """
    from .core import Settings  # local import to keep loaders import-light

    known = set(Settings.model_fields)
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in META_ENV_FIELDS or field_name not in known:
            continue
        config[field_name] = value.strip()
    return config


# --- File Loading ---


def load_pyproject(path: Path | None = None) -> dict[str, Any]:
    """Load the ``[tool.nextpipe]`` table from pyproject.toml.

    A missing file, an unreadable file or an absent table all yield an
    empty mapping.
    """
    data = _read_toml(path or get_pyproject_path())
    section = data.get("tool", {}).get(CONFIG_TOOL_NAME, {})
    return dict(section) if isinstance(section, dict) else {}


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}
