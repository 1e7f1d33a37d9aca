"""Environment probing for compiler backend detection.

Backends are discovered per machine and per project, so every check here
reads the current state of the system instead of caching it.
"""

import re
import shutil
from pathlib import Path
from typing import Protocol

# Project file marking a Compass project root
COMPASS_CONFIG_FILE = "config.rb"

# Sass gem launchers relative to a Ruby install root, in lookup order
SASS_GEM_EXECUTABLES = (
    Path("bin") / "sass.bat",
    Path("bin") / "sass",
)

_COMPASS_SETTING = re.compile(
    r"""^\s*(?P<key>\w+)\s*=\s*["'](?P<value>[^"']*)["']""",
    re.MULTILINE,
)


class EnvironmentProbe(Protocol):
    """Queries about installed tooling used by the backend selector."""

    def is_compass_installed(self) -> bool: ...

    def find_compass_config(self, directory: Path) -> Path | None: ...

    def is_compass_project(self, directory: Path) -> bool: ...

    def sass_gem_executable(self, ruby_root: Path) -> Path | None: ...


class SystemEnvironmentProbe:
    """Probe backed by PATH lookups and the real filesystem."""

    def __init__(self, compass_path: str = "compass") -> None:
        self.compass_path = compass_path

    def is_compass_installed(self) -> bool:
        return shutil.which(self.compass_path) is not None

    def find_compass_config(self, directory: Path) -> Path | None:
        """Find the Compass config governing a directory.

        Args:
            directory: Directory of the stylesheet being compiled.

        Returns:
            Path to config.rb in the directory or its nearest ancestor.
        """
        directory = directory.resolve()
        for candidate in (directory, *directory.parents):
            config = candidate / COMPASS_CONFIG_FILE
            if config.is_file():
                return config
        return None

    def is_compass_project(self, directory: Path) -> bool:
        return self.find_compass_config(directory) is not None

    def sass_gem_executable(self, ruby_root: Path) -> Path | None:
        """Locate the sass gem launcher under a Ruby install root."""
        if not ruby_root.is_dir():
            return None
        for relative in SASS_GEM_EXECUTABLES:
            executable = ruby_root / relative
            if executable.is_file():
                return executable
        return None


def read_compass_settings(config_file: Path) -> dict[str, str]:
    """Read simple ``key = "value"`` assignments from a Compass config.rb."""
    text = config_file.read_text(encoding="utf-8", errors="replace")
    return {m.group("key"): m.group("value") for m in _COMPASS_SETTING.finditer(text)}
