"""Pytest configuration and fixtures.

Provides environment isolation and call-recording test doubles. The
isolation fixture is autouse unless a test opts out via marker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import pytest

from nextpipe import Success, reset_config_cache

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class RecordingStep:
    """Step double that records every argument it was called with.

    Returns ``Success(arg)`` by default; pass ``returns`` to answer with a
    fixed value or ``raises`` to make every call fail with that exception.
    """

    returns: Any = None
    raises: BaseException | None = None
    calls: list[Any] = field(default_factory=list)

    def __call__(self, arg: Any) -> Any:
        self.calls.append(arg)
        if self.raises is not None:
            raise self.raises
        return Success(arg) if self.returns is None else self.returns

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recording_step() -> type[RecordingStep]:
    """Return the RecordingStep class for building step doubles."""
    return RecordingStep


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_nextpipe_env(request, monkeypatch, tmp_path):
    """Ensure a clean nextpipe environment for each test.

    Clears NEXTPIPE_* variables, points pyproject lookup at an empty temp
    path and drops the cached default config.
    Opt-out: @pytest.mark.allow_env_pollution
    """
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.startswith("NEXTPIPE_"):
                monkeypatch.delenv(key, raising=False)
        monkeypatch.setenv(
            "NEXTPIPE_PYPROJECT_PATH", str(tmp_path / "missing-pyproject.toml")
        )
    reset_config_cache()
    yield
    reset_config_cache()
