from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from mago_diagnostics.core.config import Settings, settings as default_settings
from mago_diagnostics.domain.models import Diagnostic
from mago_diagnostics.normalizers.base import OutputParser
from mago_diagnostics.normalizers.failure_policy import ToolFailure, detect_tool_failure
from mago_diagnostics.normalizers.registry import ParserRegistry
from mago_diagnostics.services.collection import DiagnosticCollection

logger = logging.getLogger(__name__)

Outcome = Literal["issues_found", "no_issues", "unparsed_output", "tool_error"]


class UnknownToolError(LookupError):
    pass


class OutputTooLargeError(ValueError):
    pass


@dataclass
class CheckResult:
    tool: str
    command: str
    target: str
    outcome: Outcome
    summary: str
    diagnostics: dict[str, list[Diagnostic]] = field(default_factory=dict)
    skipped_lines: int = 0
    failure: ToolFailure | None = None

    @property
    def total(self) -> int:
        return sum(len(d) for d in self.diagnostics.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool": self.tool,
            "command": self.command,
            "target": self.target,
            "outcome": self.outcome,
            "summary": self.summary,
            "total": self.total,
            "files": len(self.diagnostics),
            "skipped_lines": self.skipped_lines,
            "failure": None
            if self.failure is None
            else {
                "kind": self.failure.kind,
                "line": self.failure.line,
                "column": self.failure.column,
                "error_lines": list(self.failure.error_lines),
            },
            "diagnostics": {
                f: [d.to_dict() for d in diags] for f, diags in self.diagnostics.items()
            },
        }


class DiagnosticsService:
    """
    Orchestrates: raw tool output → failure check → parse → diagnostics collection.
    """

    def __init__(
        self,
        registry: ParserRegistry,
        collection: DiagnosticCollection,
        config: Settings | None = None,
    ):
        self.registry = registry
        self.collection = collection
        self.config = config or default_settings

    def check_file(
        self, tool: str, output: str, file_path: str, command: str = "lint"
    ) -> CheckResult:
        parser = self._prepare(tool, output, command, file_path)

        failure = detect_tool_failure(output)
        if failure:
            return self._failed(tool, command, file_path, failure)

        report = parser.parse_single_report(output, file_path)
        by_file = {file_path: report.diagnostics} if report.diagnostics else {}
        return self._finish(
            tool, command, file_path, output, by_file, report.format, report.skipped_lines, project=False
        )

    def check_project(
        self, tool: str, output: str, workspace_root: str, command: str = "lint"
    ) -> CheckResult:
        parser = self._prepare(tool, output, command, workspace_root)

        failure = detect_tool_failure(output)
        if failure:
            return self._failed(tool, command, workspace_root, failure)

        report = parser.parse_project_report(output, workspace_root)
        return self._finish(
            tool,
            command,
            workspace_root,
            output,
            report.diagnostics,
            report.format,
            report.skipped_lines,
            project=True,
        )

    def _prepare(self, tool: str, output: str, command: str, target: str) -> OutputParser:
        extra = {"tool": tool, "command": command, "target": target}

        if self.config.LOG_RAW_OUTPUT:
            logger.debug("Raw output:\n%s", output, extra=extra)

        if len(output) > self.config.MAX_OUTPUT_CHARS:
            raise OutputTooLargeError(
                f"Output is {len(output)} chars, limit is {self.config.MAX_OUTPUT_CHARS}"
            )

        parser = self.registry.by_tool(tool)
        if parser is None:
            raise UnknownToolError(f"No parser registered for tool: {tool}")
        return parser

    def _failed(self, tool: str, command: str, target: str, failure: ToolFailure) -> CheckResult:
        summary = failure.describe(command)
        logger.warning(
            "%s (%d error line(s))",
            summary,
            len(failure.error_lines),
            extra={"tool": tool, "command": command, "target": target},
        )
        return CheckResult(
            tool=tool,
            command=command,
            target=target,
            outcome="tool_error",
            summary=summary,
            failure=failure,
        )

    def _finish(
        self,
        tool: str,
        command: str,
        target: str,
        output: str,
        by_file: dict[str, list[Diagnostic]],
        fmt: str,
        skipped_lines: int,
        project: bool,
    ) -> CheckResult:
        for file_path, diagnostics in by_file.items():
            self.collection.merge(file_path, diagnostics)

        total = sum(len(d) for d in by_file.values())
        label = f"Mago {command}"

        if total > 0:
            outcome: Outcome = "issues_found"
            summary = f"{label}: Found {total} issue(s)"
            if project:
                summary += f" in {len(by_file)} file(s)"
        elif not output.strip() or fmt == "json":
            outcome = "no_issues"
            summary = f"{label}: No issues found"
        else:
            outcome = "unparsed_output"
            summary = f"{label}: Output received but no issues parsed"

        logger.info(
            "%s (%d line(s) skipped)",
            summary,
            skipped_lines,
            extra={"tool": tool, "command": command, "target": target},
        )
        return CheckResult(
            tool=tool,
            command=command,
            target=target,
            outcome=outcome,
            summary=summary,
            diagnostics=by_file,
            skipped_lines=skipped_lines,
        )
