# Per-file report context: store the listing path and its lines.
# Handles reading report files, error handling for unreadable files,
# and logging of line/marker counts so contexts are ready for the block scanner.

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

from cmpscan.parser import is_block_open

logger = logging.getLogger(__name__)


def count_markers(lines: Sequence[str]) -> int:
    """Count block-open marker lines (including pagination repeats)."""
    return sum(1 for line in lines if is_block_open(line))


class ReportFile:
    """
    One listing file read into memory: path and its lines in order.

    Lines keep their content but not their line terminators. The line
    sequence is a tuple so the context cannot be modified after reading.
    """

    def __init__(self, path: Path, lines: Sequence[str]) -> None:
        self._path = path
        self._lines: Tuple[str, ...] = tuple(lines)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lines(self) -> Tuple[str, ...]:
        return self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"ReportFile(path={str(self._path)!r}, lines={len(self._lines)})"

    @classmethod
    def from_text(cls, path: Path, text: str) -> "ReportFile":
        """Build a ReportFile from already-decoded text."""
        # str.splitlines() would also break on form feeds, which start each listing page
        lines = [line.rstrip("\r") for line in text.split("\n")]
        if lines and lines[-1] == "":
            lines.pop()
        return cls(path=path, lines=lines)


def create_context(path: Path, encoding: str = "utf-8") -> Optional[ReportFile]:
    """
    Read a listing file into a ReportFile (path, lines).

    - Unreadable file (permission, missing): returns None and logs error.
    - Undecodable bytes are replaced rather than rejected; listings are
      frequently written in a legacy code page.
    - Success: returns ReportFile and logs line count and marker count.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None

    report = ReportFile.from_text(path, raw.decode(encoding, errors="replace"))
    logger.info(
        "Read %s: %d line(s), %d comparison header(s)",
        path,
        len(report),
        count_markers(report.lines),
    )
    return report
