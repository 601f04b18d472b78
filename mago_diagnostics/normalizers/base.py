from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Literal

from mago_diagnostics.domain.models import Diagnostic

OutputFormat = Literal["json", "lines"]


@dataclass
class FileReport:
    diagnostics: list[Diagnostic]
    format: OutputFormat
    skipped_lines: int = 0


@dataclass
class ProjectReport:
    diagnostics: dict[str, list[Diagnostic]] = field(default_factory=dict)
    format: OutputFormat = "json"
    skipped_lines: int = 0

    @property
    def total(self) -> int:
        return sum(len(v) for v in self.diagnostics.values())


class OutputParser(ABC):
    tool_name: str

    @abstractmethod
    def parse_single_report(self, output: str, file_path: str) -> FileReport: ...

    @abstractmethod
    def parse_project_report(self, output: str, workspace_root: str) -> ProjectReport: ...

    def parse_single(self, output: str, file_path: str) -> list[Diagnostic]:
        return self.parse_single_report(output, file_path).diagnostics

    def parse_project(self, output: str, workspace_root: str) -> dict[str, list[Diagnostic]]:
        return self.parse_project_report(output, workspace_root).diagnostics
