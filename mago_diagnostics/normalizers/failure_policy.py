from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

FailureKind = Literal["configuration", "execution"]

_TOML_ERROR = re.compile(r"TOML parse error at line (\d+), column (\d+)")


@dataclass(frozen=True)
class ToolFailure:
    kind: FailureKind
    line: int | None = None
    column: int | None = None
    error_lines: tuple[str, ...] = field(default_factory=tuple)

    def describe(self, command: str) -> str:
        if self.kind == "configuration":
            if self.line is not None:
                return (
                    f"Mago {command}: Configuration error in mago.toml at "
                    f"line {self.line}, column {self.column}"
                )
            return f"Mago {command}: Failed to build configuration"
        return f"Mago {command}: Execution error occurred"


def detect_tool_failure(output: str) -> ToolFailure | None:
    """Spot failures mago reports on its own output instead of issues.

    mago logs fatal problems as ``ERROR`` lines; a broken ``mago.toml``
    additionally says ``Failed to build the configuration``, usually with
    the TOML parser's line/column.
    """
    if "ERROR" not in output:
        return None

    if "Failed to build the configuration" in output:
        m = _TOML_ERROR.search(output)
        if m:
            return ToolFailure("configuration", line=int(m.group(1)), column=int(m.group(2)))
        return ToolFailure("configuration")

    error_lines = tuple(line for line in output.split("\n") if "ERROR" in line)
    return ToolFailure("execution", error_lines=error_lines)
