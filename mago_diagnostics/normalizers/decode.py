"""Whole-document JSON decoding.

mago prints one of three JSON shapes depending on version and flags: a bare
array of issues, an object wrapping them under ``issues``, or a single issue
object. ``decode_document`` settles which one we have before any per-issue
logic runs, so callers branch over a closed set of variants.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class ArrayOfIssues:
    items: list[Any]


@dataclass(frozen=True)
class IssuesWrapper:
    items: list[Any]


@dataclass(frozen=True)
class SingleIssue:
    item: Any


@dataclass(frozen=True)
class ParseFailure:
    error: str


Decoded = Union[ArrayOfIssues, IssuesWrapper, SingleIssue, ParseFailure]


def decode_document(output: str) -> Decoded:
    try:
        data = json.loads(output.strip())
    except (ValueError, RecursionError) as e:
        return ParseFailure(str(e))

    if isinstance(data, list):
        return ArrayOfIssues(data)
    if isinstance(data, dict) and isinstance(data.get("issues"), list):
        return IssuesWrapper(data["issues"])
    return SingleIssue(data)


def issue_items(decoded: Decoded) -> list[Any]:
    """Raw issue values carried by a successfully decoded document."""
    if isinstance(decoded, (ArrayOfIssues, IssuesWrapper)):
        return decoded.items
    if isinstance(decoded, SingleIssue):
        return [decoded.item]
    return []


def decode_line(line: str) -> dict[str, Any] | None:
    """Decode one output line as a JSON object, or None when it isn't one."""
    if not line.startswith("{"):
        return None
    try:
        data = json.loads(line)
    except (ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None
