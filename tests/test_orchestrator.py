"""Tests for directory orchestration and result sinks."""

import os
import shutil
from pathlib import Path

import pytest

from cmpscan.config import Config
from cmpscan.findings.models import Verdict
from cmpscan.orchestrator import scan_directory, scan_files
from cmpscan.sink import JsonLinesSink, MemorySink, read_json_lines

SAMPLE = Path(__file__).parent / "sample.lst"

DIFFERING = """\
The COMPARE Procedure
Comparison of WORK.ADLB with QC.ADLB
Number of Variables in WORK.ADLB but not in QC.ADLB: 1.
"""

CLEAN = """\
The COMPARE Procedure
Comparison of WORK.ADVS with QC.ADVS
Total Number of Values which Compare Unequal: 0.
"""


@pytest.fixture
def outputs(tmp_path):
    shutil.copy(SAMPLE, tmp_path / "adsl_adae.lst")
    (tmp_path / "ADLB.LST").write_text(DIFFERING)
    (tmp_path / "advs.lst").write_text(CLEAN)
    (tmp_path / "ignored.txt").write_text(DIFFERING)
    return tmp_path


def test_scan_directory(outputs):
    sink = MemorySink()
    summary = scan_directory(outputs, sink=sink)
    assert summary.files_scanned == 3
    assert summary.files_failed == 0
    assert summary.blocks_seen == 4
    pairs = sorted(v.dataset_pair for v in sink.verdicts)
    assert pairs == [
        "Comparison of WORK.ADAE with QC.ADAE",
        "Comparison of WORK.ADLB with QC.ADLB",
    ]
    assert summary.verdicts == sink.verdicts
    assert all(v.has_differences for v in summary.differing)


def test_scan_directory_debug_keeps_clean_blocks(outputs):
    summary = scan_directory(outputs, config=Config(debug=True))
    assert len(summary.verdicts) == 4
    assert len(summary.differing) == 2


def test_scan_directory_custom_extension(outputs):
    summary = scan_directory(outputs, config=Config(extension="txt"))
    assert summary.files_scanned == 1
    assert [v.path.name for v in summary.verdicts] == ["ignored.txt"]


def test_scan_directory_missing_root(tmp_path):
    sink = MemorySink()
    with pytest.raises(FileNotFoundError):
        scan_directory(tmp_path / "missing", sink=sink)
    assert sink.verdicts == []


def test_scan_directory_empty(tmp_path, caplog):
    summary = scan_directory(tmp_path)
    assert summary.files_scanned == 0
    assert summary.verdicts == []
    assert "No .lst files found" in caplog.text


def test_unreadable_file_does_not_stop_others(tmp_path):
    good = tmp_path / "good.lst"
    good.write_text(DIFFERING)
    summary = scan_files([tmp_path / "missing.lst", good])
    assert summary.files_failed == 1
    assert summary.files_scanned == 1
    assert len(summary.verdicts) == 1


@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions")
def test_permission_denied_file_skipped(tmp_path):
    locked = tmp_path / "locked.lst"
    locked.write_text(DIFFERING)
    locked.chmod(0)
    try:
        summary = scan_directory(tmp_path)
    finally:
        locked.chmod(0o644)
    assert summary.files_failed == 1
    assert summary.verdicts == []


def test_json_lines_sink_appends(outputs, tmp_path):
    store = tmp_path / "results" / "verdicts.jsonl"
    sink = JsonLinesSink(store)
    scan_directory(outputs, sink=sink)
    scan_directory(outputs, sink=sink)
    assert sink.written == 4

    verdicts = read_json_lines(store)
    assert len(verdicts) == 4
    assert all(v.has_differences for v in verdicts)
    assert verdicts[0] == verdicts[2]


def test_json_lines_sink_skips_empty_batches(tmp_path):
    store = tmp_path / "verdicts.jsonl"
    JsonLinesSink(store).append([])
    assert not store.exists()


def test_config_normalizes_extension():
    assert Config(extension="LST").extension == ".lst"
    assert Config(extension=" .Txt ").extension == ".txt"
    with pytest.raises(ValueError):
        Config(extension="  ")


def test_summary_lists_scanned_files(outputs, tmp_path):
    summary = scan_directory(outputs)
    assert [p.name for p in summary.files] == ["ADLB.LST", "adsl_adae.lst", "advs.lst"]

    summary = scan_files([tmp_path / "missing.lst", outputs / "advs.lst"])
    assert [p.name for p in summary.files] == ["advs.lst"]


def test_verdict_path_is_a_native_field():
    verdict = Verdict.model_validate({"path": "qc/adae.lst", "dataset_pair": "Comparison of A with B"})
    assert verdict.path == Path("qc/adae.lst")
    assert Verdict.model_json_schema()["properties"]["path"]["format"] == "path"
    assert "arbitrary_types_allowed" not in Verdict.model_config
