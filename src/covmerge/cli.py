"""covmerge CLI: top-level command group."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

import click
import yaml
from rich.logging import RichHandler
from rich.markup import escape

from covmerge import __version__
from covmerge.config import load_config, validate_config
from covmerge.orchestrator import MergePipeline
from covmerge.reporters.terminal import console, reporter
from covmerge.utils.ci_context import detect_ci_context, set_failed, set_output

if TYPE_CHECKING:
    from covmerge.config import MergeConfig
    from covmerge.utils.ci_context import CIContext

OUTPUT_NAME = "coverage-file"


def _configure_logging(*, debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _config_to_dict(config: Any) -> dict[str, Any]:
    """Convert MergeConfig to dictionary for display."""
    result = asdict(config)
    # Remove the raw field as it's redundant
    result.pop("raw", None)
    return result


def _load_config_or_exit(
    path: str,
    ci_context: CIContext,
    *,
    coverage_file: str | None = None,
    remove_prefix: str | None = None,
) -> MergeConfig:
    """Load configuration, exiting with status 1 if `.covmerge.yml` is unusable."""
    try:
        return load_config(
            path,
            coverage_file=coverage_file,
            remove_prefix=remove_prefix,
            workspace=ci_context.workspace,
        )
    except (yaml.YAMLError, OSError) as e:
        message = f"Failed to load configuration: {e}"
        reporter.print_error(message)
        set_failed(ci_context, message)
        raise SystemExit(1) from e


@click.group()
@click.option("--debug", is_flag=True, help="Show debug logging, including merged data.")
@click.version_option(version=__version__, prog_name="covmerge")
def cli(*, debug: bool) -> None:
    """Merge SimpleCov line coverage across runs and report files."""
    _configure_logging(debug=debug)


@cli.command()
@click.option(
    "--coverage-file",
    "coverage_file",
    default=None,
    help="Glob pattern for the resultset files to merge (e.g. '**/.resultset.json').",
)
@click.option(
    "--remove-prefix",
    "remove_prefix",
    default=None,
    help="Prefix to strip from file names; 'github_workspace' strips the checkout root.",
)
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory holding .covmerge.yml.",
)
def merge(coverage_file: str | None, remove_prefix: str | None, path: str) -> None:
    """Merge coverage resultsets into coverage.json.

    Settings not given on the command line are read from GitHub Actions
    inputs, then from `.covmerge.yml`.

    Example:
      covmerge merge --coverage-file 'coverage-*/.resultset.json' \\
        --remove-prefix github_workspace
    """
    ci_context = detect_ci_context()
    config = _load_config_or_exit(
        path, ci_context, coverage_file=coverage_file, remove_prefix=remove_prefix
    )

    result = MergePipeline(config).run()
    reporter.print_merge_result(result)

    if not result.succeeded:
        set_failed(ci_context, result.errors[0])
        raise SystemExit(1)

    set_output(ci_context, OUTPUT_NAME, result.output_path)


@cli.group("config")
def config_group() -> None:
    """Inspect merge configuration."""


@config_group.command("show")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory holding .covmerge.yml.",
)
@click.option(
    "--json-output",
    "as_json",
    is_flag=True,
    help="Output as JSON instead of YAML.",
)
def config_show(path: str, *, as_json: bool) -> None:
    """Display the resolved configuration.

    Example:
      covmerge config show
      covmerge config show --json-output
    """
    config = _load_config_or_exit(path, detect_ci_context())
    config_dict = _config_to_dict(config)

    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
    else:
        click.echo(yaml.safe_dump(config_dict, sort_keys=False, default_flow_style=False))


@config_group.command("validate")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory holding .covmerge.yml.",
)
def config_validate(path: str) -> None:
    """Validate the resolved configuration.

    Example:
      covmerge config validate
    """
    config = _load_config_or_exit(path, detect_ci_context())
    errors = validate_config(config)

    if not errors:
        reporter.print_success("Configuration is valid!")
        return

    reporter.print_error(f"Found {len(errors)} configuration error(s):")
    for idx, error in enumerate(errors, start=1):
        console.print(f"  {idx}. [red]{escape(error)}[/red]")
    raise SystemExit(1)
