import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from rpcdispatch.app.settings import SETTINGS_ENV_VAR, loadSettings
from rpcdispatch.core.logging import clearLogContext



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def isolatedSettings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Points the user settings file at a per-test path so ~/.rpcdispatch never leaks in."""
    settingsPath = tmp_path / "rpcdispatch.json5"
    monkeypatch.setenv(SETTINGS_ENV_VAR, str(settingsPath))
    loadSettings.cache_clear()
    clearLogContext()
    yield settingsPath
    loadSettings.cache_clear()
    clearLogContext()
