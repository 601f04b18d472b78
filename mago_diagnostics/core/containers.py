from __future__ import annotations

from mago_diagnostics.core.config import settings
from mago_diagnostics.normalizers.mago_parser import MagoOutputParser
from mago_diagnostics.normalizers.registry import ParserRegistry
from mago_diagnostics.services.collection import DiagnosticCollection
from mago_diagnostics.services.diagnostics_service import DiagnosticsService


def build_parser_registry() -> ParserRegistry:
    return ParserRegistry([MagoOutputParser(source=settings.DIAGNOSTIC_SOURCE)])


def build_diagnostics_service(collection: DiagnosticCollection | None = None) -> DiagnosticsService:
    return DiagnosticsService(
        build_parser_registry(),
        collection if collection is not None else DiagnosticCollection(),
    )
