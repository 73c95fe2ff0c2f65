"""Merge pipeline: resolve, read, flatten, merge, strip and write."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from covmerge.adapters.coverage.simplecov import SimpleCovAdapter
from covmerge.config import resolve_prefix
from covmerge.merger import merge_into, remove_prefixes
from covmerge.models.coverage import MergeResult, MergeStatus
from covmerge.utils.files import OUTPUT_FILENAME, expand_pattern, write_json

if TYPE_CHECKING:
    from covmerge.adapters.coverage.base import CoverageAdapter
    from covmerge.config import MergeConfig
    from covmerge.models.coverage import MergedCoverage

logger = logging.getLogger(__name__)


class MergePipeline:
    """Runs one merge from a resolved configuration.

    Every failure is caught in :meth:`run` and returned as a FAILED
    result carrying a single message; the output file is only written
    once every input has been merged.
    """

    def __init__(
        self,
        config: MergeConfig,
        *,
        adapter: CoverageAdapter | None = None,
        output_path: str | Path = OUTPUT_FILENAME,
    ) -> None:
        self._config = config
        self._adapter = adapter or SimpleCovAdapter()
        self._output_path = Path(output_path)

    def run(self) -> MergeResult:
        """Run the pipeline and return its result."""
        try:
            return self._run()
        except Exception as exc:
            logger.debug("Merge failed", exc_info=True)
            return MergeResult(status=MergeStatus.FAILED, errors=[str(exc)])

    def _run(self) -> MergeResult:
        pattern = self._config.require_coverage_file()
        prefix = resolve_prefix(self._config.remove_prefix, self._config.workspace)
        logger.info("Coverage file pattern: %s", pattern)

        files = expand_pattern(pattern)
        logger.info("Coverage files: %s", ", ".join(files))

        merged: MergedCoverage = {}
        records_merged = 0
        for file_name in files:
            records = self._adapter.parse_coverage_file(Path(file_name))
            logger.debug("Flattened %s: %s", file_name, records)
            for record in records:
                merge_into(merged, record)
            records_merged += len(records)
        logger.debug("Merged coverage: %s", merged)

        output = remove_prefixes(merged, prefix)
        logger.debug("With prefixes removed: %s", output)

        path = write_json(output, self._output_path)
        logger.info("Wrote merged coverage to %s", path)

        return MergeResult(
            status=MergeStatus.COMPLETED,
            output_path=path,
            files_read=files,
            records_merged=records_merged,
            coverage=output,
        )
