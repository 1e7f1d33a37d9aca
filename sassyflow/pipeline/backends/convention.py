"""
Convention Backend - Compass integration.

Compass projects declare their own sass/css directory layout in config.rb;
output paths follow that layout and the compass CLI does the writing.
"""

from pathlib import Path

from sassyflow.core.exceptions.errors import CompileError
from sassyflow.pipeline.backends.base import BaseBackend
from sassyflow.pipeline.backends.probe import (
    EnvironmentProbe,
    SystemEnvironmentProbe,
    read_compass_settings,
)

DEFAULT_SASS_DIR = "sass"
DEFAULT_CSS_DIR = "stylesheets"


class ConventionBackend(BaseBackend):
    """Compiles documents that live inside a Compass project."""

    name = "compass"
    description = "Compass project convention compiler"

    def __init__(
        self,
        directory: Path,
        probe: EnvironmentProbe | None = None,
        compass_path: str = "compass",
    ) -> None:
        """
        Initialize the backend.

        Args:
            directory: Directory of the document being compiled.
            probe: Environment probe used to locate the project.
            compass_path: Compass executable name or path.
        """
        self.directory = directory
        self.probe = probe or SystemEnvironmentProbe(compass_path)
        self.compass_path = compass_path

    @property
    def config_file(self) -> Path | None:
        return self.probe.find_compass_config(self.directory)

    def is_available(self) -> bool:
        return self.probe.is_compass_installed() and self.probe.is_compass_project(self.directory)

    def get_output_path(self, source_file: Path) -> Path | None:
        config_file = self.config_file
        if config_file is None:
            return None

        project = config_file.parent
        settings = read_compass_settings(config_file)
        sass_dir = project / settings.get("sass_dir", DEFAULT_SASS_DIR)
        css_dir = project / settings.get("css_dir", DEFAULT_CSS_DIR)

        try:
            relative = source_file.resolve().relative_to(sass_dir.resolve())
        except ValueError:
            relative = Path(source_file.name)
        return css_dir / relative.with_suffix(".css")

    async def compile(self, source_file: Path, output_path: Path | None) -> None:
        config_file = self.config_file
        if config_file is None:
            raise CompileError(
                "Compass project configuration not found",
                source_file=source_file,
            )

        project = config_file.parent
        returncode, stdout, stderr = await self.run_command(
            [self.compass_path, "compile", "--quiet", str(source_file.resolve())],
            cwd=project,
        )
        if returncode != 0:
            output = (stderr or stdout).strip()
            raise CompileError(
                output or f"compass exited with code {returncode}",
                source_file=source_file,
                return_code=returncode,
                output=output,
            )
