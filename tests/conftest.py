import logging

import pytest
from fastapi.testclient import TestClient

from mago_diagnostics.api import parse_routes
from mago_diagnostics.main import app
from mago_diagnostics.normalizers.mago_parser import MagoOutputParser

FILE = "/srv/app/src/test.php"


@pytest.fixture(autouse=True)
def _empty_collection():
    """Start every test with nothing left over in the API's collection."""
    parse_routes.diagnostics_service.collection.clear()
    yield
    parse_routes.diagnostics_service.collection.clear()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Tests that call setup_logging() must not leak handlers bound to captured streams."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def parser() -> MagoOutputParser:
    return MagoOutputParser()


@pytest.fixture
def file_path() -> str:
    return FILE


def annotated_issue(message="Test message", level="Error", line=1, column=1, path=None, **extra):
    """A mago JSON issue in the current (annotation) format."""
    span = {"start": {"offset": 0, "line": line, "column": column}}
    if path is not None:
        span["file_id"] = {"name": path.replace("\\", "/").rsplit("/", 1)[-1], "path": path}
    issue = {"level": level, "message": message, "annotations": [{"kind": "Primary", "span": span}]}
    issue.update(extra)
    return issue
