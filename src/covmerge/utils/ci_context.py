"""GitHub Actions context detection and input/output helpers."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import click

logger = logging.getLogger(__name__)


@dataclass
class CIContext:
    """Detected CI execution context."""

    is_github_actions: bool
    """Running inside a GitHub Actions job."""

    workspace: str | None
    """Checkout root of the repository (``$GITHUB_WORKSPACE``)."""

    output_file: str | None
    """File that step outputs are appended to (``$GITHUB_OUTPUT``)."""


def detect_ci_context() -> CIContext:
    """Detect the GitHub Actions context from environment variables."""
    return CIContext(
        is_github_actions=os.getenv("GITHUB_ACTIONS") == "true",
        workspace=os.getenv("GITHUB_WORKSPACE") or None,
        output_file=os.getenv("GITHUB_OUTPUT") or None,
    )


def get_action_input(name: str) -> str | None:
    """Return a GitHub Actions input value, or None when it is not set.

    The runner exposes ``with:`` inputs as ``INPUT_<NAME>`` with the name
    upper-cased and dashes kept; the underscore spelling is accepted too.
    """
    upper = name.upper()
    for key in (f"INPUT_{upper}", f"INPUT_{upper.replace('-', '_')}"):
        value = os.environ.get(key)
        if value is not None:
            return value.strip()
    return None


def set_output(ci_context: CIContext, name: str, value: str) -> None:
    """Publish a step output.

    Appends ``name=value`` to ``$GITHUB_OUTPUT`` when available, otherwise
    prints it so wrapper scripts can pick it up.
    """
    if ci_context.output_file:
        with Path(ci_context.output_file).open("a", encoding="utf-8") as f:
            f.write(f"{name}={value}\n")
        logger.debug("Wrote output %s to %s", name, ci_context.output_file)
    else:
        click.echo(f"{name}={value}")


def set_failed(ci_context: CIContext, message: str) -> None:
    """Emit a GitHub Actions error annotation for *message*."""
    if ci_context.is_github_actions:
        # Annotations are single-line; the runner decodes %0A back to newlines.
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        click.echo(f"::error::{escaped}")
