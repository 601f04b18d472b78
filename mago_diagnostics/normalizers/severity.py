from __future__ import annotations

from typing import Any

from mago_diagnostics.domain.models import Severity

_SEVERITIES: dict[str, Severity] = {
    "error": "error",
    "warning": "warning",
    "info": "info",
    "hint": "hint",
}


def map_severity(value: Any) -> Severity:
    """Map a mago level / text severity to a diagnostic severity.

    Matching is case-insensitive; anything unrecognized becomes ``error``.
    """
    if not isinstance(value, str):
        return "error"
    return _SEVERITIES.get(value.strip().lower(), "error")
