# rpcdispatch/core/dictpath.py
from __future__ import annotations
from typing import Any
from collections.abc import Mapping

__all__ = ["getByPath", "hasPath"]

_MISSING = object()



def _splitPath(path: str) -> list[str]:
    """
    Splits a dotted path, where backslash escapes the next character.

    Examples:
      - dispatch.reportProcTime -> ["dispatch", "reportProcTime"]
      - a\\.b.c                 -> ["a.b", "c"]
    """
    if not isinstance(path, str) or not path:
        raise ValueError("Path must be a non-empty string")

    parts: list[str] = []
    curr: list[str] = []
    esc = False
    for ch in path:
        if esc:
            curr.append(ch)
            esc = False
            continue
        if ch == "\\":
            esc = True
            continue
        if ch == ".":
            parts.append("".join(curr))
            curr = []
            continue
        curr.append(ch)
    if esc:
        raise ValueError("Path ends with a dangling escape (trailing backslash)")
    parts.append("".join(curr))

    if any(part == "" for part in parts):
        raise ValueError(f"Path '{path}' contains empty segment(s)")
    return parts



def _resolve(obj: Any, path: str) -> Any:
    try:
        parts = _splitPath(path)
    except ValueError:
        # Invalid path is treated as "not found"
        return _MISSING

    current: Any = obj
    for part in parts:
        if isinstance(current, Mapping):
            if part not in current:
                return _MISSING
            current = current[part]
            continue
        return _MISSING
    return current



def getByPath(obj: Any, path: str, default: Any | None = None) -> Any:
    """Returns the value at dotted `path` inside nested mappings, or `default` when unreachable."""
    value = _resolve(obj, path)
    return default if value is _MISSING else value



def hasPath(obj: Any, path: str) -> bool:
    return _resolve(obj, path) is not _MISSING
