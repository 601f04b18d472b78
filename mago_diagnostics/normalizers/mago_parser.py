from __future__ import annotations

import re
from typing import Any, Callable

from mago_diagnostics.domain.models import Diagnostic, Issue
from .base import FileReport, OutputFormat, OutputParser, ProjectReport
from .decode import ParseFailure, decode_document, decode_line, issue_items
from .severity import map_severity
from .util import one_based, resolve_path

# e.g. src/Foo.php:10:5: error: Undefined variable
#      C:\proj\Foo.php:15: warning: Unused variable
_TEXT_LINE = re.compile(
    r"^(.+?):(\d+)(?::(\d+))?:\s*(error|warning|info|hint):\s*(.+)$",
    re.IGNORECASE,
)

JsonConverter = Callable[[Any], "Issue | None"]
TextConverter = Callable[["re.Match[str]"], "Issue | None"]


class MagoOutputParser(OutputParser):
    """Turns captured `mago lint` / `mago analyze` output into diagnostics.

    Accepts the current JSON reporting format (issues with span
    annotations), the older flat JSON format, and plain text lines. The
    parser keeps no state between calls.
    """

    tool_name = "mago"

    def __init__(self, source: str = "mago"):
        self.source = source

    def parse_single_report(self, output: str, file_path: str) -> FileReport:
        issues, fmt, skipped = _scan(
            output,
            lambda raw: json_to_issue(raw, file_path=file_path),
            lambda m: text_to_issue(m, file_path=file_path),
        )
        return FileReport(
            diagnostics=[Diagnostic.from_issue(i, self.source) for i in issues],
            format=fmt,
            skipped_lines=skipped,
        )

    def parse_project_report(self, output: str, workspace_root: str) -> ProjectReport:
        issues, fmt, skipped = _scan(
            output,
            lambda raw: json_to_issue(raw, workspace_root=workspace_root),
            lambda m: text_to_issue(m, workspace_root=workspace_root),
        )
        report = ProjectReport(format=fmt, skipped_lines=skipped)
        for issue in issues:
            report.diagnostics.setdefault(issue.file, []).append(
                Diagnostic.from_issue(issue, self.source)
            )
        return report


def _scan(
    output: str,
    from_json: JsonConverter,
    from_text: TextConverter,
) -> tuple[list[Issue], OutputFormat, int]:
    decoded = decode_document(output)
    if not isinstance(decoded, ParseFailure):
        found = [i for i in map(from_json, issue_items(decoded)) if i is not None]
        return found, "json", 0

    issues: list[Issue] = []
    skipped = 0
    for line in output.split("\n"):
        line = line.strip()
        if not line:
            continue

        raw = decode_line(line)
        if raw is not None:
            issue = from_json(raw)
        else:
            m = _TEXT_LINE.match(line)
            if not m:
                skipped += 1
                continue
            issue = from_text(m)

        if issue is not None:
            issues.append(issue)

    return issues, "lines", skipped


def json_to_issue(
    raw: Any,
    *,
    file_path: str | None = None,
    workspace_root: str | None = None,
) -> Issue | None:
    """Convert one mago JSON issue.

    With ``file_path`` every issue is pinned to that file. With
    ``workspace_root`` the file comes from the issue itself and issues
    without one are dropped.
    """
    if not isinstance(raw, dict):
        return None

    message = raw.get("message")
    if not isinstance(message, str) or not message.strip():
        return None

    annotation = _primary_annotation(raw)

    if file_path is None:
        reported = _reported_file(raw, annotation)
        if not reported:
            return None
        file_path = resolve_path(reported, workspace_root or "")

    line, column, end_line, end_column = _positions(raw, annotation)

    notes = raw.get("notes")
    help_text = raw.get("help")

    return Issue(
        file=file_path,
        line=line - 1,
        column=column - 1,
        end_line=end_line - 1,
        end_column=end_column - 1,
        severity=map_severity(raw.get("level") or "Error"),
        message=message,
        code=raw.get("code") or None,
        notes=tuple(str(n) for n in notes) if isinstance(notes, list) else (),
        help=help_text if isinstance(help_text, str) and help_text else None,
    )


def text_to_issue(
    m: "re.Match[str]",
    *,
    file_path: str | None = None,
    workspace_root: str | None = None,
) -> Issue:
    reported, line_str, column_str, severity, message = m.groups()
    if file_path is None:
        file_path = resolve_path(reported, workspace_root or "")

    return Issue(
        file=file_path,
        line=one_based(line_str) - 1,
        column=one_based(column_str) - 1,
        severity=map_severity(severity),
        message=message,
    )


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _primary_annotation(raw: dict[str, Any]) -> dict[str, Any] | None:
    """The ``Primary`` annotation, else the first one; None without annotations."""
    annotations = raw.get("annotations")
    if not isinstance(annotations, list) or not annotations:
        return None
    for a in annotations:
        if isinstance(a, dict) and a.get("kind") == "Primary":
            return a
    return _as_dict(annotations[0])


def _reported_file(raw: dict[str, Any], annotation: dict[str, Any] | None) -> str:
    if annotation is not None:
        file_id = _as_dict(_as_dict(annotation.get("span")).get("file_id"))
        for key in ("path", "name"):
            value = file_id.get(key)
            if isinstance(value, str) and value:
                return value

    legacy = raw.get("file")
    return legacy if isinstance(legacy, str) else ""


def _positions(
    raw: dict[str, Any], annotation: dict[str, Any] | None
) -> tuple[int, int, int, int]:
    """1-indexed (line, column, end_line, end_column) for an issue."""
    if annotation is not None:
        span = _as_dict(annotation.get("span"))
        start = _as_dict(span.get("start"))
        end = _as_dict(span.get("end"))
        line = one_based(start.get("line"))
        column = one_based(start.get("column"))
        return (
            line,
            column,
            one_based(end.get("line"), line),
            one_based(end.get("column"), column + 1),
        )

    if "line" in raw:
        line = one_based(raw.get("line"))
        column = one_based(raw.get("column"))
        return line, column, line, column + 1

    # No location at all: pin to the top of the file with a visible marker
    return 1, 1, 1, 2
