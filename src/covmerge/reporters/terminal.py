"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from covmerge.models.coverage import MergeResult

console = Console(stderr=True)


class CLIReporter:
    """Rich terminal output reporter for merge runs.

    Writes to stderr so stdout stays free for step outputs.
    """

    def __init__(self) -> None:
        """Initialize the CLI reporter."""
        self.console = console

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def print_merge_result(self, result: MergeResult) -> None:
        """Print the outcome of a merge run."""
        if not result.succeeded:
            for error in result.errors:
                self.print_error(error)
            return

        self.print_info(f"Read {len(result.files_read)} file(s):")
        for file_name in result.files_read:
            self.print_info(f"  {file_name}")
        self.print_success(
            f"Merged {result.records_merged} run(s) covering {len(result.coverage)} "
            f"source file(s) into {result.output_path}"
        )


reporter = CLIReporter()
