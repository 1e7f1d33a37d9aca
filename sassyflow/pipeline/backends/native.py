"""
Native Backend - libsass integration.

Compiles in-process through the libsass bindings. Always available, so it
is the fallback when no other backend applies.
"""

import asyncio
from pathlib import Path

import sass

from sassyflow.core.exceptions.errors import CompileError
from sassyflow.pipeline.backends.base import CSS_ENCODING, OptionsBackend


class NativeBackend(OptionsBackend):
    """Compiles documents with libsass."""

    name = "libsass"
    description = "In-process libsass compiler"

    def is_available(self) -> bool:
        return True

    def render(self, source_file: Path) -> str:
        return sass.compile(
            filename=str(source_file),
            output_style="expanded",
            source_comments=self.options.include_source_comments,
        )

    async def compile(self, source_file: Path, output_path: Path | None) -> None:
        try:
            css = await asyncio.to_thread(self.render, source_file)
        except (sass.CompileError, OSError) as e:
            raise CompileError(str(e).strip(), source_file=source_file) from e

        if output_path is None:
            return

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(css, encoding=CSS_ENCODING)
        except OSError as e:
            raise CompileError(
                f"Failed to write {output_path}: {e}",
                source_file=source_file,
            ) from e
