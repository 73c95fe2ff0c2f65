"""SimpleCov resultset adapter for Ruby projects.

SimpleCov writes ``coverage/.resultset.json``, keyed by command name (the
test suite that produced the run). A single resultset may hold several
runs, e.g. when RSpec and Minitest share one coverage directory.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from covmerge.adapters.coverage.base import CoverageAdapter
from covmerge.errors import ReportFormatError

if TYPE_CHECKING:
    from covmerge.models.coverage import FlatRecord, LineCounts

logger = logging.getLogger(__name__)


class SimpleCovAdapter(CoverageAdapter):
    """SimpleCov resultset adapter.

    Resultset format::

        {
          "RSpec": {
            "coverage": {
              "/app/lib/file.rb": {"lines": [null, 1, 0, ...]}
            },
            "timestamp": 1700000000
          },
          "Minitest": {...}
        }

    Each run becomes one ``{file: lines}`` record; run names and any other
    per-run or per-file keys (``timestamp``, ``branches``) are dropped.
    """

    @property
    def name(self) -> str:
        return "simplecov"

    def flatten(self, report: Any, *, source: str = "<report>") -> list[FlatRecord]:
        """Flatten a resultset into one record per named run."""
        if not isinstance(report, dict):
            msg = f"{source}: expected an object of named runs, got {type(report).__name__}"
            raise ReportFormatError(msg)

        records = [
            convert_format(run, source=f"{source}: run '{run_name}'")
            for run_name, run in report.items()
        ]
        logger.debug("Flattened %s into %d run(s)", source, len(records))
        return records


def flatten_runs(reports: list[Any]) -> list[FlatRecord]:
    """Flatten several decoded resultsets, keeping report and run order."""
    adapter = SimpleCovAdapter()
    records: list[FlatRecord] = []
    for report in reports:
        records.extend(adapter.flatten(report))
    return records


def convert_format(run: Any, *, source: str = "<run>") -> FlatRecord:
    """Convert ``{"coverage": {file: {"lines": [...]}}}`` into ``{file: [...]}``."""
    if not isinstance(run, dict) or not isinstance(run.get("coverage"), dict):
        msg = f"{source}: missing 'coverage' object"
        raise ReportFormatError(msg)

    record: FlatRecord = {}
    for file_name, file_data in run["coverage"].items():
        if not isinstance(file_data, dict) or "lines" not in file_data:
            msg = f"{source}: missing 'lines' for {file_name}"
            raise ReportFormatError(msg)
        record[file_name] = _validate_lines(file_data["lines"], f"{source}: {file_name}")
    return record


def _validate_lines(lines: Any, source: str) -> LineCounts:
    """Return *lines* if it is a list of ``None`` or non-negative integers."""
    if not isinstance(lines, list):
        msg = f"{source}: 'lines' must be an array, got {type(lines).__name__}"
        raise ReportFormatError(msg)

    for index, hit in enumerate(lines):
        if hit is None:
            continue
        if isinstance(hit, bool) or not isinstance(hit, int) or hit < 0:
            msg = f"{source}: invalid hit count {hit!r} for line {index + 1}"
            raise ReportFormatError(msg)
    return lines
