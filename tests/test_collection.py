from mago_diagnostics.domain.models import Diagnostic, Range
from mago_diagnostics.services.collection import DiagnosticCollection


def _diag(msg: str, file: str = "/a.php") -> Diagnostic:
    return Diagnostic(file=file, range=Range.marker(0, 0), message=msg, severity="error", source="mago")


def test_merge_appends():
    c = DiagnosticCollection()
    c.merge("/a.php", [_diag("one")])
    c.merge("/a.php", [_diag("two")])

    assert [d.message for d in c.get("/a.php")] == ["one", "two"]


def test_merge_empty_adds_no_key():
    c = DiagnosticCollection()
    c.merge("/a.php", [])
    assert c.files() == []


def test_set_replaces_and_empty_set_removes():
    c = DiagnosticCollection()
    c.merge("/a.php", [_diag("old")])
    c.set("/a.php", [_diag("new")])
    assert [d.message for d in c.get("/a.php")] == ["new"]

    c.set("/a.php", [])
    assert c.files() == []


def test_delete_and_clear():
    c = DiagnosticCollection()
    c.merge("/a.php", [_diag("x")])
    c.merge("/b.php", [_diag("y", "/b.php")])

    assert c.delete("/a.php") is True
    assert c.delete("/a.php") is False
    assert c.files() == ["/b.php"]

    c.clear()
    assert c.snapshot() == {}


def test_returned_lists_are_copies():
    c = DiagnosticCollection()
    c.merge("/a.php", [_diag("x")])

    c.get("/a.php").append(_diag("y"))
    c.snapshot()["/a.php"].clear()

    assert len(c.get("/a.php")) == 1
