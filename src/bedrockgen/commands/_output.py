"""Shared console output for generation commands."""

from collections.abc import Iterable

from rich.console import Console
from rich.table import Table

from bedrockgen.artifact_writer import GenerationResult

console = Console()


def build_results_table(results: Iterable[GenerationResult], title: str) -> Table:
    """Build Rich table listing generated and skipped files.

    Args:
        results: Generation outcomes in generation order
        title: Table title

    Returns:
        Configured Rich table
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("File", style="cyan")
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for result in results:
        status = "[green]generated[/green]" if result.written else "[yellow]skipped[/yellow]"
        table.add_row(result.path.name, status, result.message or str(result.path))

    return table


def print_results(results: list[GenerationResult], title: str) -> None:
    console.print(build_results_table(results, title))

    skipped = [r for r in results if r.skipped]
    if skipped:
        console.print(
            f"[dim]{len(skipped)} existing file(s) left untouched. "
            "Delete them first to regenerate.[/dim]"
        )
