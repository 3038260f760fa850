"""Tests for cmpscan.context: ReportFile, create_context, marker counts."""

import logging
from pathlib import Path

from cmpscan.context import ReportFile, count_markers, create_context


def test_count_markers():
    lines = ["The COMPARE Procedure", "Comparison of A with B", "\fThe COMPARE Procedure"]
    assert count_markers(lines) == 2
    assert count_markers([]) == 0


def test_create_context_sample_lst():
    sample_path = Path(__file__).parent / "sample.lst"
    ctx = create_context(sample_path)
    assert ctx is not None
    assert ctx.path == sample_path
    assert len(ctx) == len(ctx.lines)
    assert count_markers(ctx.lines) == 3


def test_create_context_strips_line_endings(tmp_path):
    report = tmp_path / "crlf.lst"
    report.write_bytes(b"first\r\nsecond\r\n")
    ctx = create_context(report)
    assert ctx is not None
    assert ctx.lines == ("first", "second")


def test_create_context_keeps_form_feeds_on_their_line(tmp_path):
    """Page breaks do not split a header line into two."""
    report = tmp_path / "paged.lst"
    report.write_bytes(b"\f   The COMPARE Procedure\nComparison of A with B\n")
    ctx = create_context(report)
    assert ctx is not None
    assert len(ctx) == 2
    assert ctx.lines[0].startswith("\f")


def test_create_context_replaces_undecodable_bytes(tmp_path):
    report = tmp_path / "latin.lst"
    report.write_bytes(b"Comparison of WORK.\xe9 with WORK.B\n")
    ctx = create_context(report)
    assert ctx is not None
    assert ctx.lines[0].startswith("Comparison of WORK.")


def test_create_context_nonexistent(caplog):
    with caplog.at_level(logging.ERROR):
        ctx = create_context(Path("/nonexistent/report.lst"))
    assert ctx is None
    assert "Failed to read" in caplog.text


def test_create_context_logs_counts(tmp_path, caplog):
    report = tmp_path / "one.lst"
    report.write_text("The COMPARE Procedure\nComparison of A with B\n")
    with caplog.at_level(logging.INFO):
        create_context(report)
    assert "2 line(s), 1 comparison header(s)" in caplog.text


def test_report_file_is_immutable():
    lines = ["a", "b"]
    report = ReportFile(Path("x.lst"), lines)
    lines.append("c")
    assert report.lines == ("a", "b")
    assert "x.lst" in repr(report)


def test_report_file_from_text_without_trailing_newline():
    report = ReportFile.from_text(Path("x.lst"), "a\nb")
    assert report.lines == ("a", "b")
