"""Coverage data models shared by the adapters, merger and pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

LineHit = int | None
"""Hit count for one source line; ``None`` marks a non-executable line."""

LineCounts = list[LineHit]
"""Per-line hit counts for one file, index 0 is line 1."""

FlatRecord = dict[str, LineCounts]
"""One run's contribution: source file path to its line counts."""

MergedCoverage = dict[str, LineCounts]
"""Accumulated line counts for every file seen across all runs."""


class MergeStatus(Enum):
    """Outcome of a merge pipeline run."""

    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class MergeResult:
    """Result of running the merge pipeline once."""

    status: MergeStatus
    """Whether the merged artifact was written."""

    output_path: str = ""
    """Path of the written artifact (empty on failure)."""

    files_read: list[str] = field(default_factory=list)
    """Input artifacts that were read, in resolved order."""

    records_merged: int = 0
    """Number of flattened runs folded into the result."""

    coverage: MergedCoverage = field(default_factory=dict)
    """Final (prefix-stripped) merged coverage."""

    errors: list[str] = field(default_factory=list)
    """Error messages; holds exactly one entry on failure."""

    @property
    def succeeded(self) -> bool:
        """Return True when the artifact was written."""
        return self.status == MergeStatus.COMPLETED
