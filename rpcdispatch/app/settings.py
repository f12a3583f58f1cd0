# rpcdispatch/app/settings.py
from __future__ import annotations
import json5, os
from pydantic import JsonValue
from pathlib import Path
from typing import Any, cast
from functools import lru_cache

from rpcdispatch.core.dictpath import getByPath

import logging
logger = logging.getLogger(__name__)

__all__ = [
    "SETTINGS_ENV_VAR", "SETTINGS_DEFAULT_USER_PATH", "SETTINGS",
    "userSettingsPath", "loadUserSettings", "loadSettings", "reloadSettings",
    "deepMerge", "settings", "settingsBool",
]


SETTINGS_ENV_VAR = "RPCDISPATCH_SETTINGS"
SETTINGS_DEFAULT_USER_PATH = Path("~/.rpcdispatch/rpcdispatch.json5")
SETTINGS: JsonValue = {
    "__source": "RPCDISPATCH_DEFAULTS",
    "dispatch": {"reportProcTime": False},
    "logging": {"file": {"enabled": False, "path": "rpcdispatch.log", "maxBytes": 10 * 1024 * 1024, "backupCount": 5}},
    "debug": {
        "devModeEnabled": False,
        "suppressRecurringMessages": {"enabled": False, "windowSeconds": 60, "maxPerWindow": 5, "summaryLevel": "INFO"},
    },
}



def userSettingsPath() -> Path:
    override = os.environ.get(SETTINGS_ENV_VAR)
    return Path(os.path.expanduser(override or str(SETTINGS_DEFAULT_USER_PATH)))



def loadUserSettings() -> JsonValue:
    filePath = userSettingsPath()
    if filePath.exists():
        try:
            return json5.loads(filePath.read_text(encoding="utf-8"))
        except Exception as err:
            logger.error("Failed to parse '%s': %s", filePath, err)
    return {}



@lru_cache(maxsize=1)
def loadSettings() -> JsonValue:
    return deepMerge(SETTINGS, loadUserSettings())



def reloadSettings() -> JsonValue:
    """Drops the cached merge so the next read picks up changes to the user file."""
    loadSettings.cache_clear()
    return loadSettings()



def deepMerge(first: JsonValue, second: JsonValue) -> JsonValue:
    """
    Returns a new JsonValue where keys from `second` override/extend `first`.
    Only merges recursively when BOTH sides are JSON objects (dicts).
    For all other JSON types (lists, strings, numbers, booleans, null),
    the right-hand value `second` replaces `first`.
    """
    if isinstance(first, dict) and isinstance(second, dict):
        out: dict[str, JsonValue] = {}
        # Start with left
        for key, value in first.items():
            out[key] = cast(JsonValue, value)
        # Overlay right
        for key, value in second.items():
            if key in out:
                out[key] = deepMerge(out[key], cast(JsonValue, value))
            else:
                out[key] = cast(JsonValue, value)
        return cast(JsonValue, out)

    # If not both dicts, replace with right-hand side
    return cast(JsonValue, second)

# ---------- Ergonomic accessors over merged settings ----------

def settings(path: str, default: Any = None) -> Any:
    """Returns value at `path` from merged settings, or `default` if missing."""
    val = getByPath(loadSettings(), path)
    return default if val is None else val



def settingsBool(path: str, default: bool = False) -> bool:
    """Returns bool value at `path` or `default` if missing."""
    val = getByPath(loadSettings(), path)
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    return bool(val)
