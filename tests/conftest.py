"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path
from typing import Any, Generator

import pytest

from sassyflow.core.config.settings import CompileSettings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_settings():
    """Factory for compile settings snapshots with test-friendly defaults."""

    def _make(**overrides: Any) -> CompileSettings:
        values: dict[str, Any] = {
            "generate_css_on_save": True,
            "generate_minified_css_on_save": False,
            "include_css_in_project": True,
            "include_css_in_project_output": False,
            "css_output_directory": None,
            "replace_css_with_exception": True,
            "ruby_install_path": None,
            "include_source_comments": False,
            "debug_logging": False,
        }
        values.update(overrides)
        return CompileSettings(**values)

    return _make


@pytest.fixture
def sample_project(temp_dir: Path) -> Path:
    """Create a small stylesheet project.

    Layout::

        site.scss        (root, imports _partials)
        admin.scss       (root, imports _partials)
        _partials.scss
        readme.txt
        .cache/hidden.scss
        nested/theme.SCSS
    """
    project = temp_dir / "project"
    project.mkdir()
    (project / "_partials.scss").write_text("$brand: red;\n")
    (project / "site.scss").write_text('@import "partials";\nbody { color: $brand; }\n')
    (project / "admin.scss").write_text('@import "partials";\n.admin { color: $brand; }\n')
    (project / "readme.txt").write_text("not a stylesheet\n")
    (project / ".cache").mkdir()
    (project / ".cache" / "hidden.scss").write_text("a { color: blue; }\n")
    (project / "nested").mkdir()
    (project / "nested" / "theme.SCSS").write_text("p { margin: 0; }\n")
    return project
