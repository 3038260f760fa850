"""
Block scanner: the line-driven state machine that splits one listing into
comparison blocks and decides, per block, whether differences were reported.

A block opens on a comparison header line ("The COMPARE Procedure"); the line
right after it names the dataset pair. The block stays open until a header
with a *different* dataset pair appears or the file ends. Headers repeated
with the same pair are page breaks inside one comparison and change nothing.

Every other line inside an open block goes through the RuleSet, which may set
the block's flag. Lines before the first header belong to no block and are
not evaluated.

Typical usage:
    from cmpscan.blocks import BlockScanner
    from cmpscan.context import create_context

    report = create_context(Path("compare.lst"))
    verdicts = BlockScanner().scan(report)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from cmpscan.context import ReportFile
from cmpscan.findings.models import LineTrace, Verdict
from cmpscan.parser import is_block_open, normalize_identifier
from cmpscan.rules.ruleset import RuleSet, default_ruleset

logger = logging.getLogger(__name__)


@dataclass
class BlockState:
    """Mutable state of the block currently open in one scan."""

    identifier: str = ""
    flag: bool = False
    is_open: bool = False
    start_line: Optional[int] = None
    end_line: Optional[int] = None
    trace: List[LineTrace] = field(default_factory=list)


class BlockScanner:
    """
    Scan the lines of one report into per-block verdicts.

    The scanner keeps no state between calls; each scan owns a fresh
    BlockState, so one instance can be reused for any number of files.

    Args:
        rules: Diagnostic rules to apply; defaults to the built-in table.
        debug: If True, every block is reported (including those without
               differences) and each verdict carries the trace of rules that
               fired inside it.
    """

    def __init__(self, rules: Optional[RuleSet] = None, *, debug: bool = False) -> None:
        self.rules = rules if rules is not None else default_ruleset()
        self.debug = debug

    def iter_blocks(self, lines: Sequence[str]) -> Iterator[BlockState]:
        """Yield each block of lines once it is closed, in file order."""
        state = BlockState()
        numbered = iter(enumerate(lines, start=1))

        for number, line in numbered:
            if is_block_open(line):
                following = next(numbered, None)
                if following is None:
                    logger.debug("Comparison header on last line %d has no dataset line", number)
                    break
                identifier = normalize_identifier(following[1])
                if state.is_open and identifier == state.identifier:
                    logger.debug("Page break in block %r at line %d", identifier, number)
                    continue
                if state.is_open:
                    state.end_line = number - 1
                    yield state
                state = BlockState(identifier=identifier, is_open=True, start_line=number)
                logger.debug("Opened block %r at line %d", identifier, number)
                continue

            if not state.is_open:
                continue

            result = self.rules.match(line, state.flag)
            if result is None:
                continue
            state.flag = result.flag
            if self.debug:
                state.trace.append(
                    LineTrace(
                        line=number,
                        rule_id=result.rule_id,
                        value=result.value,
                        flag=result.flag,
                        text=line.strip(),
                    )
                )

        if state.is_open:
            state.end_line = len(lines)
            yield state

    def verdicts(self, path: Path, blocks: Iterable[BlockState]) -> List[Verdict]:
        """Turn closed blocks into verdicts, keeping only differing blocks unless debugging."""
        results: List[Verdict] = []
        for block in blocks:
            logger.debug(
                "Flushed block %r (lines %s-%s): differences=%s",
                block.identifier,
                block.start_line,
                block.end_line,
                block.flag,
            )
            if not block.flag and not self.debug:
                continue
            results.append(
                Verdict(
                    path=path,
                    dataset_pair=block.identifier,
                    has_differences=block.flag,
                    start_line=block.start_line,
                    end_line=block.end_line,
                    trace=list(block.trace) if self.debug else None,
                )
            )
        return results

    def scan(self, report: ReportFile) -> List[Verdict]:
        """Scan one report file and return its verdicts in block order."""
        return self.verdicts(report.path, self.iter_blocks(report.lines))
