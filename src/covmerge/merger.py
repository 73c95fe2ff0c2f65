"""Line-coverage merging.

Combines the per-file line counts of any number of runs into one map,
using SimpleCov's line combiner rules: a ``None`` entry marks a line that
is not executable, ``0`` an executable line that never ran.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covmerge.models.coverage import FlatRecord, LineCounts, LineHit, MergedCoverage

logger = logging.getLogger(__name__)


def line_sum(a: LineHit, b: LineHit) -> LineHit:
    """Combine two hit counts for the same line.

    ``None`` counts as zero for the sum, but a zero total involving a
    ``None`` stays ``None`` so non-executable lines are never reported as
    missed.
    """
    total = (a or 0) + (b or 0)
    if total == 0 and (a is None or b is None):
        return None
    return total


def combine_lines(one: LineCounts, two: LineCounts) -> LineCounts:
    """Combine two line-count sequences index by index.

    The result has the length of the longer sequence. Where only one side
    has an entry at an index, that entry is taken as-is.
    """
    combined: LineCounts = []
    for index in range(max(len(one), len(two))):
        if index >= len(one):
            combined.append(two[index])
        elif index >= len(two):
            combined.append(one[index])
        else:
            combined.append(line_sum(one[index], two[index]))
    return combined


def merge_into(accumulator: MergedCoverage, record: FlatRecord) -> MergedCoverage:
    """Fold one flattened run into *accumulator* and return it.

    Files only present in *record* are copied in; files only present in
    the accumulator are left untouched.
    """
    for file_name, lines in record.items():
        existing = accumulator.get(file_name)
        if existing is None:
            accumulator[file_name] = list(lines)
        else:
            accumulator[file_name] = combine_lines(existing, lines)
    return accumulator


def merge_records(records: Iterable[FlatRecord]) -> MergedCoverage:
    """Merge flattened runs into a single file → line counts map."""
    merged: MergedCoverage = {}
    for record in records:
        merge_into(merged, record)
    logger.debug("Merged %d file(s)", len(merged))
    return merged


def remove_prefixes(coverage: MergedCoverage, prefix: str) -> MergedCoverage:
    """Strip a literal leading *prefix* from every file name that has it.

    Only the first occurrence is removed and paths are not normalised.
    An empty prefix returns *coverage* unchanged.
    """
    if not prefix:
        return coverage

    result: MergedCoverage = {}
    for file_name, lines in coverage.items():
        new_name = file_name[len(prefix) :] if file_name.startswith(prefix) else file_name
        result[new_name] = lines
    return result
