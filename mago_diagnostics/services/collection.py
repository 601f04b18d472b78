from __future__ import annotations

import threading

from mago_diagnostics.domain.models import Diagnostic


class DiagnosticCollection:
    """
    In-memory diagnostics sink keyed by file path.

    Lives for the process only; nothing is written to disk.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_file: dict[str, list[Diagnostic]] = {}

    def get(self, file: str) -> list[Diagnostic]:
        with self._lock:
            return list(self._by_file.get(file, []))

    def set(self, file: str, diagnostics: list[Diagnostic]) -> None:
        with self._lock:
            if diagnostics:
                self._by_file[file] = list(diagnostics)
            else:
                self._by_file.pop(file, None)

    def merge(self, file: str, diagnostics: list[Diagnostic]) -> None:
        """Append to whatever is already stored for ``file``."""
        if not diagnostics:
            return
        with self._lock:
            self._by_file.setdefault(file, []).extend(diagnostics)

    def delete(self, file: str) -> bool:
        with self._lock:
            return self._by_file.pop(file, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._by_file.clear()

    def files(self) -> list[str]:
        with self._lock:
            return list(self._by_file)

    def snapshot(self) -> dict[str, list[Diagnostic]]:
        with self._lock:
            return {f: list(d) for f, d in self._by_file.items()}
