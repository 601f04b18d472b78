from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

Severity = Literal["error", "warning", "info", "hint"]

# LSP DiagnosticSeverity values, for editor sinks that want the numeric form
LSP_SEVERITY: dict[str, int] = {"error": 1, "warning": 2, "info": 3, "hint": 4}


@dataclass(frozen=True)
class Position:
    line: int
    column: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    @classmethod
    def marker(cls, line: int, column: int) -> "Range":
        """One-column range starting at (line, column)."""
        return cls(Position(line, column), Position(line, column + 1))


@dataclass(frozen=True)
class Issue:
    """Format-agnostic finding, positions already 0-indexed."""

    file: str
    line: int
    message: str
    column: int = 0
    end_line: int | None = None
    end_column: int | None = None
    severity: Severity = "error"
    code: str | int | None = None
    notes: tuple[str, ...] = ()
    help: str | None = None

    @property
    def range(self) -> Range:
        end_line = self.line if self.end_line is None else self.end_line
        end_column = self.column + 1 if self.end_column is None else self.end_column
        return Range(Position(self.line, self.column), Position(end_line, end_column))


@dataclass(frozen=True)
class RelatedInformation:
    file: str
    range: Range
    message: str


@dataclass(frozen=True)
class Diagnostic:
    file: str
    range: Range
    message: str
    severity: Severity
    source: str
    code: str | int | None = None
    related_information: tuple[RelatedInformation, ...] = field(default_factory=tuple)

    @classmethod
    def from_issue(cls, issue: Issue, source: str) -> "Diagnostic":
        rng = issue.range
        related = [RelatedInformation(issue.file, rng, f"Note: {note}") for note in issue.notes]
        if issue.help:
            related.append(RelatedInformation(issue.file, rng, f"Help: {issue.help}"))
        return cls(
            file=issue.file,
            range=rng,
            message=issue.message,
            severity=issue.severity,
            source=source,
            code=issue.code,
            related_information=tuple(related),
        )

    @property
    def lsp_severity(self) -> int:
        return LSP_SEVERITY[self.severity]

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["related_information"] = list(d["related_information"])
        d["lsp_severity"] = self.lsp_severity
        return d
