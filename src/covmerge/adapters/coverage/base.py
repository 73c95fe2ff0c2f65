"""Base class for coverage report adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from covmerge.utils.files import read_json

if TYPE_CHECKING:
    from pathlib import Path

    from covmerge.models.coverage import FlatRecord

logger = logging.getLogger(__name__)


class CoverageAdapter(ABC):
    """Abstract base class for coverage report formats.

    An adapter knows how to recognise its tool's report files and how to
    flatten a decoded report into per-run ``FlatRecord`` mappings that the
    merger can combine.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Coverage tool identifier (e.g. 'simplecov')."""

    @abstractmethod
    def flatten(self, report: Any, *, source: str = "<report>") -> list[FlatRecord]:
        """Flatten one decoded report into one record per run.

        Args:
            report: Decoded JSON contents of a report file.
            source: Where the report came from, used in error messages.

        Returns:
            One ``FlatRecord`` per run contained in the report.
        """

    def parse_coverage_file(self, coverage_file: Path) -> list[FlatRecord]:
        """Read *coverage_file* and flatten its runs.

        Raises:
            ReportLoadError: The file cannot be read or decoded.
            ReportFormatError: The contents do not match the format.
        """
        report = read_json(coverage_file)
        logger.debug("File contents of %s: %s", coverage_file, report)
        return self.flatten(report, source=str(coverage_file))
