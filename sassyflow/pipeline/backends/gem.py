"""
Gem Backend - Ruby sass gem integration.

Runs the sass launcher shipped with a Ruby installation as an external
process.
"""

from pathlib import Path

from sassyflow.core.config.settings import CompileSettings
from sassyflow.core.exceptions.errors import CompileError
from sassyflow.pipeline.backends.base import OptionsBackend
from sassyflow.pipeline.backends.probe import EnvironmentProbe, SystemEnvironmentProbe


class GemBackend(OptionsBackend):
    """Compiles documents with the Ruby sass gem."""

    name = "sass-gem"
    description = "Ruby sass gem command line compiler"

    def __init__(
        self,
        options: CompileSettings,
        probe: EnvironmentProbe | None = None,
    ) -> None:
        super().__init__(options)
        self.probe = probe or SystemEnvironmentProbe()
        self.ruby_install_path = options.ruby_install_path

    @property
    def executable(self) -> Path | None:
        if self.ruby_install_path is None:
            return None
        return self.probe.sass_gem_executable(self.ruby_install_path)

    def is_available(self) -> bool:
        return self.executable is not None

    def build_command(self, source_file: Path, output_path: Path) -> list[str]:
        cmd = [str(self.executable), "--style", "expanded"]
        if self.options.include_source_comments:
            cmd.append("--line-comments")
        cmd.extend([str(source_file), str(output_path)])
        return cmd

    async def compile(self, source_file: Path, output_path: Path | None) -> None:
        if self.executable is None:
            raise CompileError(
                f"sass gem not found under {self.ruby_install_path}",
                source_file=source_file,
            )
        if output_path is None:
            raise CompileError("No output path for sass gem", source_file=source_file)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        returncode, stdout, stderr = await self.run_command(
            self.build_command(source_file, output_path),
            cwd=source_file.parent,
        )

        output = (stderr or stdout).strip()
        if returncode != 0:
            raise CompileError(
                output or f"sass exited with code {returncode}",
                source_file=source_file,
                return_code=returncode,
                output=output,
            )
        if not output_path.exists():
            raise CompileError(
                f"sass reported success but did not write {output_path.name}",
                source_file=source_file,
                return_code=returncode,
                output=output,
            )
