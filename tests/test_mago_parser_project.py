import json
import os

from conftest import annotated_issue


def test_groups_issues_by_file(parser):
    out = json.dumps(
        [
            annotated_issue("Error in file1", path="F:\\project\\file1.php", line=1),
            annotated_issue("Warning in file2", level="Warning", path="F:\\project\\file2.php", line=5, column=10),
            annotated_issue("Another error in file1", path="F:\\project\\file1.php", line=10),
        ]
    )

    by_file = parser.parse_project(out, "F:\\project")

    assert len(by_file) == 2
    file1 = next(p for p in by_file if "file1.php" in p)
    file2 = next(p for p in by_file if "file2.php" in p)
    assert [d.message for d in by_file[file1]] == ["Error in file1", "Another error in file1"]
    assert len(by_file[file2]) == 1
    assert by_file[file2][0].file == file2


def test_first_seen_file_order(parser):
    out = json.dumps(
        [
            annotated_issue("b1", path="b.php"),
            annotated_issue("a1", path="a.php"),
            annotated_issue("b2", path="b.php"),
        ]
    )

    by_file = parser.parse_project(out, "/srv/app")

    assert [os.path.basename(p) for p in by_file] == ["b.php", "a.php"]
    assert all(by_file.values())


def test_long_path_prefix_is_stripped(parser):
    out = json.dumps(annotated_issue("Test", path="\\\\?\\F:\\project\\test.php"))

    by_file = parser.parse_project(out, "F:\\project")

    assert len(by_file) == 1
    key = next(iter(by_file))
    assert "\\\\?\\" not in key
    assert key.endswith("test.php")


def test_relative_text_path_joined_to_root(parser):
    by_file = parser.parse_project("src/test.php:10: error: Test error", "/srv/app")

    assert list(by_file) == [os.path.normpath("/srv/app/src/test.php")]
    d = by_file[os.path.normpath("/srv/app/src/test.php")][0]
    assert d.range.start.line == 9
    assert d.file == os.path.normpath("/srv/app/src/test.php")


def test_windows_style_relative_root_keeps_root(parser):
    by_file = parser.parse_project("src/test.php:10: error: Test error", "F:\\project")

    key = next(iter(by_file))
    assert "F:\\project" in key
    assert "src" in key


def test_name_used_when_path_missing(parser):
    issue = {
        "message": "m",
        "annotations": [{"span": {"file_id": {"name": "lib/x.php"}, "start": {"line": 2, "column": 1}}}],
    }

    by_file = parser.parse_project(json.dumps(issue), "/srv/app")

    assert list(by_file) == [os.path.normpath("/srv/app/lib/x.php")]


def test_legacy_file_field(parser):
    out = json.dumps({"issues": [{"message": "m", "file": "/abs/y.php", "line": 4, "column": 2}]})

    by_file = parser.parse_project(out, "/srv/app")

    d = by_file[os.path.normpath("/abs/y.php")][0]
    assert (d.range.start.line, d.range.start.column) == (3, 1)


def test_issue_without_file_is_dropped(parser):
    out = json.dumps(
        [
            {"message": "nowhere", "line": 3},
            {"message": "no file id", "annotations": [{"span": {"start": {"line": 1}}}]},
            annotated_issue("kept", path="k.php"),
        ]
    )

    by_file = parser.parse_project(out, "/srv/app")

    assert len(by_file) == 1
    assert [d.message for d in next(iter(by_file.values()))] == ["kept"]


def test_related_information_points_at_issue_file(parser):
    out = json.dumps(annotated_issue("m", path="/abs/z.php", notes=["careful"], help="rename it"))

    d = parser.parse_project(out, "/srv/app")[os.path.normpath("/abs/z.php")][0]

    assert [(r.file, r.message) for r in d.related_information] == [
        (d.file, "Note: careful"),
        (d.file, "Help: rename it"),
    ]


def test_text_lines_grouped(parser):
    out = "a.php:1: error: one\nb.php:2:3: warning: two\na.php:5: hint: three\nnoise\n"

    report = parser.parse_project_report(out, "/srv/app")

    a = os.path.normpath("/srv/app/a.php")
    b = os.path.normpath("/srv/app/b.php")
    assert list(report.diagnostics) == [a, b]
    assert [d.message for d in report.diagnostics[a]] == ["one", "three"]
    assert report.total == 3
    assert report.skipped_lines == 1


def test_empty_and_malformed_output(parser):
    assert parser.parse_project("", "/srv/app") == {}
    assert parser.parse_project("{ invalid json", "/srv/app") == {}


def test_parsing_is_repeatable(parser):
    out = json.dumps([annotated_issue("a", path="a.php"), annotated_issue("b", path="b.php")])

    assert parser.parse_project(out, "/srv/app") == parser.parse_project(out, "/srv/app")
