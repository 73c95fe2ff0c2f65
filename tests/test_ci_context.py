"""Tests for CI context detection and action output helpers."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING
from unittest.mock import patch

from covmerge.utils.ci_context import (
    CIContext,
    detect_ci_context,
    get_action_input,
    set_failed,
    set_output,
)

if TYPE_CHECKING:
    from pathlib import Path

    import pytest


def _context(**overrides: object) -> CIContext:
    values: dict[str, object] = {
        "is_github_actions": False,
        "workspace": None,
        "output_file": None,
    }
    values.update(overrides)
    return CIContext(**values)  # type: ignore[arg-type]


def test_detect_github_actions_context() -> None:
    """Test GitHub Actions context detection."""
    env = {
        "GITHUB_ACTIONS": "true",
        "GITHUB_WORKSPACE": "/home/runner/work/app/app",
        "GITHUB_OUTPUT": "/tmp/output",
    }

    with patch.dict(os.environ, env, clear=True):
        context = detect_ci_context()

        assert context.is_github_actions
        assert context.workspace == "/home/runner/work/app/app"
        assert context.output_file == "/tmp/output"


def test_workspace_only_from_github_workspace() -> None:
    """Test other providers' checkout dirs are not used as the workspace."""
    env = {
        "CI": "true",
        "GITLAB_CI": "true",
        "CI_PROJECT_DIR": "/builds/group/app",
        "CIRCLECI": "true",
        "CIRCLE_WORKING_DIRECTORY": "~/project",
    }

    with patch.dict(os.environ, env, clear=True):
        context = detect_ci_context()

        assert not context.is_github_actions
        assert context.workspace is None


def test_workspace_outside_github_actions() -> None:
    """Test GITHUB_WORKSPACE is honoured even when GITHUB_ACTIONS is unset."""
    with patch.dict(os.environ, {"GITHUB_WORKSPACE": "/ws"}, clear=True):
        context = detect_ci_context()

        assert not context.is_github_actions
        assert context.workspace == "/ws"


def test_detect_local_run() -> None:
    """Test local run outside CI."""
    with patch.dict(os.environ, {}, clear=True):
        context = detect_ci_context()

        assert not context.is_github_actions
        assert context.workspace is None
        assert context.output_file is None


def test_empty_variables_are_unset() -> None:
    """Test empty GITHUB_WORKSPACE and GITHUB_OUTPUT count as unset."""
    env = {"GITHUB_WORKSPACE": "", "GITHUB_OUTPUT": ""}

    with patch.dict(os.environ, env, clear=True):
        context = detect_ci_context()

        assert context.workspace is None
        assert context.output_file is None


def test_get_action_input() -> None:
    """Test action inputs are read with dash and underscore spellings."""
    with patch.dict(os.environ, {"INPUT_COVERAGE-FILE": "  a/*.json "}, clear=True):
        assert get_action_input("coverage-file") == "a/*.json"

    with patch.dict(os.environ, {"INPUT_REMOVE_PREFIX": "/ws"}, clear=True):
        assert get_action_input("remove-prefix") == "/ws"

    with patch.dict(os.environ, {}, clear=True):
        assert get_action_input("coverage-file") is None


def test_set_output_appends_to_output_file(tmp_path: Path) -> None:
    """Test outputs are appended to $GITHUB_OUTPUT."""
    output_file = tmp_path / "github_output"
    output_file.write_text("existing=1\n", encoding="utf-8")

    set_output(_context(output_file=str(output_file)), "coverage-file", "coverage.json")

    assert output_file.read_text(encoding="utf-8") == (
        "existing=1\ncoverage-file=coverage.json\n"
    )


def test_set_output_prints_without_output_file(capsys: pytest.CaptureFixture[str]) -> None:
    """Test outputs fall back to stdout."""
    set_output(_context(), "coverage-file", "coverage.json")

    assert capsys.readouterr().out == "coverage-file=coverage.json\n"


def test_set_failed_emits_annotation(capsys: pytest.CaptureFixture[str]) -> None:
    """Test failures become ::error:: annotations on GitHub Actions."""
    set_failed(_context(is_github_actions=True), "bad 100%\nsecond line")

    assert capsys.readouterr().out == "::error::bad 100%25%0Asecond line\n"


def test_set_failed_silent_elsewhere(capsys: pytest.CaptureFixture[str]) -> None:
    """Test no annotation is printed outside GitHub Actions."""
    set_failed(_context(), "boom")

    assert capsys.readouterr().out == ""
