"""Main CLI entry point for SassyFlow."""

import asyncio
from datetime import datetime
from pathlib import Path

import click

from sassyflow import __version__
from sassyflow.cli.display import (
    console,
    show_error,
    show_info,
    show_results,
    show_settings,
)
from sassyflow.core.config.settings import Settings
from sassyflow.core.exceptions.errors import ConfigurationError, SassyFlowError
from sassyflow.core.logger.logger import log_settings, setup_logging
from sassyflow.models.pipeline import CompileResult, SaveEvent
from sassyflow.pipeline.backends.selector import BackendSelector
from sassyflow.pipeline.orchestrator import BuildOrchestrator
from sassyflow.pipeline.project import DirectoryProjectGraph, ManifestRegistrar
from sassyflow.pipeline.router import SaveEventRouter
from sassyflow.pipeline.supervisor import BuildSupervisor
from sassyflow.pipeline.watcher import watch_directory


def build_supervisor(
    settings: Settings,
    project_root: Path,
    manifest: Path | None = None,
) -> BuildSupervisor:
    """Wire the pipeline for a project directory.

    Args:
        settings: Loaded application settings.
        project_root: Directory searched for root documents of partials.
        manifest: Optional YAML manifest receiving file nesting.

    Returns:
        A ready BuildSupervisor.
    """
    registrar = ManifestRegistrar(manifest) if manifest else None
    return BuildSupervisor(
        router=SaveEventRouter(DirectoryProjectGraph(project_root)),
        orchestrator=BuildOrchestrator(selector=BackendSelector(), registrar=registrar),
        settings_provider=lambda: settings.compile,
    )


def run_compile(
    path: Path,
    settings: Settings,
    project_root: Path,
    manifest: Path | None = None,
) -> list[CompileResult]:
    """Treat a file as just saved and build everything it affects."""
    supervisor = build_supervisor(settings, project_root, manifest)
    event = SaveEvent(path=path.resolve(), saved_at=datetime.now().astimezone())

    async def _compile() -> list[CompileResult]:
        return await supervisor.build(event)

    return asyncio.run(_compile())


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option("--debug", is_flag=True, help="Trace every pipeline decision")
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, debug: bool, version: bool) -> None:
    """SassyFlow - compile SCSS when it is saved."""
    if version:
        console.print(f"SassyFlow v{__version__}")
        ctx.exit(0)

    try:
        settings = Settings.load(config_path)
    except ConfigurationError as e:
        show_error("Configuration Error", str(e))
        ctx.exit(1)

    if debug:
        settings = settings.model_copy(
            update={"compile": settings.compile.model_copy(update={"debug_logging": True})}
        )

    setup_logging(settings.logging, debug=settings.compile.debug_logging)
    log_settings(settings.compile)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command("compile")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root searched for documents including a partial (default: file's directory)",
)
@click.option(
    "--manifest",
    "-m",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML manifest recording generated files",
)
@click.pass_obj
def compile_cmd(settings: Settings, path: Path, project: Path | None, manifest: Path | None) -> None:
    """Compile PATH as if it had just been saved."""
    results = run_compile(path, settings, project or path.resolve().parent, manifest)
    show_results(results)
    if any(result.error is not None for result in results):
        raise SystemExit(1)


@main.command()
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--manifest",
    "-m",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML manifest recording generated files",
)
@click.pass_obj
def watch(settings: Settings, directory: Path, manifest: Path | None) -> None:
    """Watch DIRECTORY and compile stylesheets as they are saved."""
    directory = directory.resolve()
    supervisor = build_supervisor(settings, directory, manifest)
    supervisor.on_result = lambda result: show_results([result])

    show_info("Watching", f"Compiling SCSS saved under {directory}. Press Ctrl+C to stop.")
    try:
        asyncio.run(watch_directory(directory, supervisor))
    except KeyboardInterrupt:
        console.print("\n[dim]Watcher stopped.[/]")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def backend(settings: Settings, path: Path) -> None:
    """Show which compiler backend PATH would be built with."""
    path = path.resolve()
    try:
        selected = BackendSelector().select(path.parent, settings.compile)
    except SassyFlowError as e:
        show_error("No Backend", str(e))
        raise SystemExit(1)

    output = selected.get_output_path(path)
    show_info(
        "Backend",
        f"{selected.name}: {selected.description}\nOutput: {output if output else '-'}",
    )


@main.command("config")
@click.pass_obj
def config_cmd(settings: Settings) -> None:
    """Show the effective compile settings."""
    show_settings(settings.compile)


if __name__ == "__main__":
    main()
