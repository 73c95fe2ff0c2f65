"""Coverage report adapters."""

from covmerge.adapters.coverage.base import CoverageAdapter
from covmerge.adapters.coverage.simplecov import SimpleCovAdapter

__all__ = [
    "CoverageAdapter",
    "SimpleCovAdapter",
]
