"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sassyflow.core.config.settings import CompileSettings
from sassyflow.models.pipeline import CompileResult

console = Console()


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_info(title: str, message: str) -> None:
    """Display an info message."""
    console.print()
    console.print(
        Panel(
            escape(message),
            title=f"[bold]{escape(title)}[/]",
            border_style="blue",
        )
    )


def _status(result: CompileResult) -> str:
    if result.skipped:
        return "[yellow]skipped[/]"
    if result.error is not None:
        return "[red]failed[/]"
    return "[green]compiled[/]"


def show_results(results: list[CompileResult]) -> None:
    """Display compile results as a table."""
    if not results:
        console.print("[dim]Nothing to compile.[/]")
        return

    table = Table(title="Compile Results", show_lines=False)
    table.add_column("Source", style="cyan")
    table.add_column("Backend")
    table.add_column("Output")
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for result in results:
        details = ""
        if result.error is not None:
            details = str(result.error).splitlines()[0] if str(result.error) else type(result.error).__name__
        elif result.skip_reason:
            details = result.skip_reason
        elif result.minified_path:
            details = f"minified: {result.minified_path.name}"

        table.add_row(
            escape(str(result.source_path)),
            result.backend or "-",
            escape(str(result.output_path)) if result.output_path else "-",
            _status(result),
            escape(details),
        )

    console.print(table)


def show_settings(options: CompileSettings) -> None:
    """Display the effective compile settings."""
    table = Table(title="Compile Settings")
    table.add_column("Option", style="cyan")
    table.add_column("Value")

    for key, value in options.model_dump().items():
        table.add_row(key, escape("" if value is None else str(value)))

    console.print(table)
