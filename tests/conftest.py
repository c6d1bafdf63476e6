"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

_ENV_VARS = (
    "RANGEEDIT_SETTINGS",
    "RANGEEDIT_EOL",
    "RANGEEDIT_POSITION_ENCODING",
    "RANGEEDIT_LOG_LEVEL",
    "RANGEEDIT_DEBUG_LOGGING",
    "RANGEEDIT_LOG_DIR",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)

@pytest.fixture
def sample_text() -> str:
    return "line1\nline2\nline3"


@pytest.fixture
def sample_range() -> dict:
    return {
        "start": {"line": 0, "character": 2},
        "end": {"line": 2, "character": 3},
    }
