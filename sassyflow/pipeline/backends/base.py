"""
Base Backend - Abstract base class for stylesheet compiler backends.

Every backend computes where a source file's css goes and performs the
compile. The orchestrator only talks to this interface, so backends can be
swapped per machine and per project.
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path

from sassyflow.core.config.settings import CompileSettings

# Generated files are written as UTF-8 with a byte order mark
CSS_ENCODING = "utf-8-sig"


class BaseBackend(ABC):
    """
    Abstract base class for compiler backends.

    Provides common output-path and process helpers and defines the
    interface all backends implement.
    """

    # Backend metadata (override in subclasses)
    name: str = "base"
    description: str = "Base compiler backend"

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the backend can be used for the current environment.

        Returns:
            True if the backend can compile, False otherwise.
        """

    @abstractmethod
    def get_output_path(self, source_file: Path) -> Path | None:
        """
        Compute where the compiled css for a source file is written.

        Args:
            source_file: Stylesheet being compiled.

        Returns:
            Output path, or None when the backend produces no file to post-process.
        """

    @abstractmethod
    async def compile(self, source_file: Path, output_path: Path | None) -> None:
        """
        Compile a stylesheet.

        Args:
            source_file: Stylesheet being compiled.
            output_path: Destination from get_output_path().

        Raises:
            CompileError: If the backend reports a failure.
        """

    @staticmethod
    def sibling_output(source_file: Path, output_directory: Path | None = None) -> Path:
        """
        Default css location: next to the source, or in an override directory.

        Relative override directories are resolved against the source's
        directory.
        """
        directory = source_file.parent
        if output_directory is not None:
            directory = (
                output_directory
                if output_directory.is_absolute()
                else directory / output_directory
            )
        return directory / f"{source_file.stem}.css"

    async def run_command(
        self,
        cmd: list[str],
        cwd: Path | None = None,
    ) -> tuple[int, str, str]:
        """
        Run an external compiler process asynchronously.

        No timeout is applied: a hung compiler only blocks its own request.

        Args:
            cmd: Command and arguments.
            cwd: Working directory.

        Returns:
            Tuple of (return_code, stdout, stderr).
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
        stdout, stderr = await process.communicate()
        return (
            process.returncode or 0,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class OptionsBackend(BaseBackend, ABC):
    """Backend configured from the compile settings snapshot."""

    def __init__(self, options: CompileSettings) -> None:
        self.options = options

    def get_output_path(self, source_file: Path) -> Path | None:
        return self.sibling_output(source_file, self.options.css_output_directory)
