"""Configuration parsing from ``.covmerge.yml``, action inputs and CLI options."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from covmerge.errors import ConfigurationError
from covmerge.utils.ci_context import get_action_input

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".covmerge.yml"

WORKSPACE_SENTINEL = "github_workspace"
"""``remove-prefix`` value meaning "strip the repository checkout root"."""

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        else:
            result[key] = value
    return result


@dataclass
class MergeConfig:
    """Resolved configuration for one merge run."""

    coverage_file: str = ""
    """Glob pattern selecting the input resultsets (required)."""

    remove_prefix: str = ""
    """Literal prefix to strip, ``""`` for none, or ``github_workspace``."""

    workspace: str | None = None
    """Checkout root substituted for ``github_workspace``."""

    raw: dict[str, Any] = field(default_factory=dict)
    """Raw parsed YAML for extension/debugging."""

    def require_coverage_file(self) -> str:
        """Return the coverage file pattern or raise if it is missing."""
        if not self.coverage_file:
            msg = "Input required and not supplied: coverage-file"
            raise ConfigurationError(msg)
        return self.coverage_file


def _load_yaml(root: Path) -> dict[str, Any]:
    config_path = root / CONFIG_FILENAME
    if not config_path.is_file():
        return {}

    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if isinstance(parsed, dict):
        return _resolve_dict(parsed)
    return {}


def _first_set(*values: str | None) -> str | None:
    for value in values:
        if value is not None:
            return value
    return None


def load_config(
    root: str | Path = ".",
    *,
    coverage_file: str | None = None,
    remove_prefix: str | None = None,
    workspace: str | None = None,
) -> MergeConfig:
    """Load the merge configuration.

    Explicit arguments win over GitHub Actions inputs
    (``INPUT_COVERAGE-FILE``, ``INPUT_REMOVE-PREFIX``), which win over
    ``.covmerge.yml`` in *root*. Missing values fall back to defaults.
    """
    raw = _load_yaml(Path(root).resolve())

    yaml_pattern = raw.get("coverage_file")
    yaml_prefix = raw.get("remove_prefix")

    pattern = _first_set(
        coverage_file,
        get_action_input("coverage-file"),
        None if yaml_pattern is None else str(yaml_pattern),
    )
    prefix = _first_set(
        remove_prefix,
        get_action_input("remove-prefix"),
        None if yaml_prefix is None else str(yaml_prefix),
    )

    return MergeConfig(
        coverage_file=pattern or "",
        remove_prefix=prefix or "",
        workspace=workspace,
        raw=raw,
    )


def resolve_prefix(raw_prefix: str, workspace: str | None) -> str:
    """Turn a ``remove-prefix`` value into the literal prefix to strip.

    ``github_workspace`` is replaced by *workspace*. A non-empty result
    always ends with ``/`` so ``/foo`` never strips from ``/foobar/x.rb``.
    An empty value means no stripping.

    Raises:
        ConfigurationError: ``github_workspace`` was requested without a
            workspace path.
    """
    if not raw_prefix:
        return ""

    prefix = raw_prefix
    if raw_prefix == WORKSPACE_SENTINEL:
        if not workspace:
            msg = f"remove-prefix is '{WORKSPACE_SENTINEL}' but GITHUB_WORKSPACE is not set"
            raise ConfigurationError(msg)
        prefix = workspace

    if not prefix.endswith("/"):
        prefix += "/"
    return prefix


def validate_config(config: MergeConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    if not config.coverage_file:
        errors.append("coverage_file is required (set coverage-file or coverage_file)")

    if config.remove_prefix == WORKSPACE_SENTINEL and not config.workspace:
        errors.append(
            f"remove_prefix is '{WORKSPACE_SENTINEL}' but no workspace is available "
            "(GITHUB_WORKSPACE is not set)"
        )

    return errors
