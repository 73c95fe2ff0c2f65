"""Data models for merged coverage."""
