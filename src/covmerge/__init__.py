"""Merge SimpleCov line coverage across runs and report files."""

__version__ = "0.1.0"
