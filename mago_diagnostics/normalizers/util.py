import os
import re
from typing import Any

_LONG_PATH_PREFIX = re.compile(r"^\\\\\?\\")
_DRIVE_LETTER = re.compile(r"^[a-zA-Z]:")


def resolve_path(filename: str, workspace_root: str) -> str:
    """
    Convert a tool-reported filename to a host-native absolute path.

    Handles three cases:
    1. Windows long-path marker (\\\\?\\C:\\...)   → marker stripped first
    2. Absolute path (/x, C:\\x, C:/x)           → normalized as-is
    3. Relative path                           → joined onto workspace_root
    """
    raw = _LONG_PATH_PREFIX.sub("", filename)
    forward = raw.replace("\\", "/")

    # Drive letters count as absolute even on POSIX hosts
    if os.path.isabs(raw) or _DRIVE_LETTER.match(forward):
        return os.path.normpath(raw)

    return os.path.normpath(os.path.join(workspace_root, forward))


def one_based(value: Any, default: int = 1) -> int:
    """Read a 1-indexed line/column value; missing or non-positive -> default."""
    if isinstance(value, bool):
        return default
    try:
        n = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return n if n >= 1 else default
