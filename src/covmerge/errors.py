"""Errors raised while loading, merging and writing coverage reports."""

from __future__ import annotations


class CoverageMergeError(Exception):
    """Base class for failures while merging coverage reports."""


class ConfigurationError(CoverageMergeError):
    """Raised when required configuration is missing or unusable."""


class NoFilesMatchedError(CoverageMergeError):
    """Raised when a coverage file pattern matches nothing."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"No coverage files found matching pattern: {pattern}")


class ReportLoadError(CoverageMergeError):
    """Raised when a report file cannot be read or is not valid JSON."""


class ReportFormatError(CoverageMergeError):
    """Raised when a decoded report does not have the expected shape."""
