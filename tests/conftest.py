"""Shared fixtures for covmerge tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from pathlib import Path

_CI_ENV_VARS = (
    "CI",
    "GITHUB_ACTIONS",
    "GITHUB_OUTPUT",
    "GITHUB_WORKSPACE",
    "GITLAB_CI",
    "CI_PROJECT_DIR",
    "CIRCLECI",
    "CIRCLE_WORKING_DIRECTORY",
    "INPUT_COVERAGE-FILE",
    "INPUT_COVERAGE_FILE",
    "INPUT_REMOVE-PREFIX",
    "INPUT_REMOVE_PREFIX",
)


@pytest.fixture(autouse=True)
def _clean_ci_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test as if outside CI with no action inputs."""
    for var in _CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def write_json(root: Path, rel: str, data: Any) -> Path:
    """Write a JSON file under *root* and return its path."""
    f = root / rel
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return f


def resultset(**runs: dict[str, list[int | None]]) -> dict[str, Any]:
    """Build a SimpleCov resultset: ``resultset(RSpec={"a.rb": [1, 0]})``."""
    return {
        name: {
            "coverage": {path: {"lines": lines} for path, lines in files.items()},
            "timestamp": 1700000000,
        }
        for name, files in runs.items()
    }
