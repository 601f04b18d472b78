from __future__ import annotations

from dataclasses import dataclass

from .base import OutputParser


@dataclass
class ParserRegistry:
    parsers: list[OutputParser]

    def list(self) -> list[str]:
        return sorted(p.tool_name for p in self.parsers)

    def by_tool(self, tool: str) -> OutputParser | None:
        for p in self.parsers:
            if p.tool_name == tool:
                return p
        return None
