# Pydantic data models for comparison results: Verdict, LineTrace, ScanSummary.

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class LineTrace(BaseModel):
    """One rule firing inside a block, retained only in debug mode."""

    line: int = Field(..., ge=1, description="1-based line number")
    rule_id: str
    value: Optional[int] = None
    flag: bool = Field(..., description="Block flag after this line")
    text: str = ""


class Verdict(BaseModel):
    """The result for one closed comparison block (e.g. WORK.A vs WORK.B differ)."""

    path: Path
    dataset_pair: str
    has_differences: bool = True
    start_line: Optional[int] = Field(None, ge=1, description="Line of the block-open marker")
    end_line: Optional[int] = Field(None, ge=1, description="Last line belonging to the block")
    trace: Optional[List[LineTrace]] = None


class ScanSummary(BaseModel):
    """Counts accumulated over one orchestrated run."""

    files_scanned: int = 0
    files_failed: int = 0
    blocks_seen: int = 0
    files: List[Path] = Field(default_factory=list, description="Report files that were read")
    verdicts: List[Verdict] = Field(default_factory=list)

    @property
    def differing(self) -> List[Verdict]:
        return [v for v in self.verdicts if v.has_differences]
