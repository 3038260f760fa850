# Orchestration: list report files, scan each one, and forward verdicts to a sink.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from cmpscan.blocks import BlockScanner
from cmpscan.config import Config, get_default_config, get_enabled_rules
from cmpscan.context import create_context
from cmpscan.findings.models import ScanSummary, Verdict
from cmpscan.sink import MemorySink, ResultSink
from cmpscan.traversal import find_report_files

logger = logging.getLogger(__name__)


def scan_files(
    paths: Sequence[Path],
    config: Optional[Config] = None,
    sink: Optional[ResultSink] = None,
) -> ScanSummary:
    """
    Scan the given report files one at a time.

    A file that cannot be read is counted in files_failed and skipped; the
    remaining files are still scanned. Each file's verdicts are appended to
    sink as one batch.
    """
    if config is None:
        config = get_default_config()
    if sink is None:
        sink = MemorySink()

    scanner = BlockScanner(get_enabled_rules(config), debug=config.debug)
    summary = ScanSummary()

    for path in paths:
        report = create_context(path, encoding=config.encoding)
        if report is None:
            # File could not be read; error already logged in create_context
            summary.files_failed += 1
            continue

        blocks = list(scanner.iter_blocks(report.lines))
        verdicts: list[Verdict] = scanner.verdicts(report.path, blocks)
        summary.files_scanned += 1
        summary.files.append(report.path)
        summary.blocks_seen += len(blocks)
        summary.verdicts.extend(verdicts)
        sink.append(verdicts)

        logger.info(
            "Scanned %s: %d block(s), %d with differences",
            path,
            len(blocks),
            sum(1 for block in blocks if block.flag),
        )

    return summary


def scan_directory(
    root: Path,
    config: Optional[Config] = None,
    sink: Optional[ResultSink] = None,
) -> ScanSummary:
    """
    Scan every report file in root that matches the configured extension.

    Raises:
        FileNotFoundError, NotADirectoryError, PermissionError: If root cannot
        be listed. Nothing is written to sink in that case.
    """
    if config is None:
        config = get_default_config()

    paths = find_report_files(root, extension=config.extension, recursive=config.recursive)
    if not paths:
        logger.warning("No %s files found under %s", config.extension, root)

    return scan_files(paths, config=config, sink=sink)
