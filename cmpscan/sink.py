# Result sinks: where verdicts go once a file has been scanned.
# MemorySink keeps them in a list; JsonLinesSink appends them to a durable .jsonl file.

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Protocol, Sequence

from cmpscan.findings.models import Verdict

logger = logging.getLogger(__name__)


class ResultSink(Protocol):
    """Anything that accepts batches of verdicts, one batch per scanned file."""

    def append(self, verdicts: Sequence[Verdict]) -> None:
        ...


class MemorySink:
    """Accumulate verdicts in memory, in arrival order."""

    def __init__(self) -> None:
        self.verdicts: List[Verdict] = []

    def append(self, verdicts: Sequence[Verdict]) -> None:
        self.verdicts.extend(verdicts)


class JsonLinesSink:
    """
    Append verdicts to a JSON Lines file, one record per line.

    Existing content is preserved, so repeated runs accumulate into the same
    store. The parent directory is created on first write.
    """

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self.path = path
        self.encoding = encoding
        self.written = 0

    def append(self, verdicts: Sequence[Verdict]) -> None:
        if not verdicts:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding=self.encoding) as handle:
            for verdict in verdicts:
                handle.write(verdict.model_dump_json(exclude_none=True))
                handle.write("\n")
        self.written += len(verdicts)
        logger.debug("Appended %d verdict(s) to %s", len(verdicts), self.path)


def read_json_lines(path: Path, encoding: str = "utf-8") -> List[Verdict]:
    """Load verdicts previously written by JsonLinesSink."""
    verdicts: List[Verdict] = []
    with path.open(encoding=encoding) as handle:
        for line in handle:
            if line.strip():
                verdicts.append(Verdict.model_validate_json(line))
    return verdicts
