"""Tests for the compiler backends."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from sassyflow.core.exceptions import CompileError
from sassyflow.pipeline.backends import (
    CSS_ENCODING,
    BaseBackend,
    ConventionBackend,
    GemBackend,
    NativeBackend,
    SystemEnvironmentProbe,
)
from sassyflow.pipeline.backends.probe import read_compass_settings
from tests.fakes import FakeProbe


class TestSiblingOutput:
    """Test the shared output path rule."""

    def test_sibling_css(self) -> None:
        assert BaseBackend.sibling_output(Path("/web/site.scss")) == Path("/web/site.css")

    def test_relative_output_directory(self) -> None:
        output = BaseBackend.sibling_output(Path("/web/scss/site.scss"), Path("../css"))
        assert output == Path("/web/scss/../css/site.css")

    def test_absolute_output_directory(self) -> None:
        output = BaseBackend.sibling_output(Path("/web/site.scss"), Path("/build/css"))
        assert output == Path("/build/css/site.css")


class TestSystemEnvironmentProbe:
    """Test filesystem-backed tool detection."""

    def test_compass_not_installed(self) -> None:
        probe = SystemEnvironmentProbe(compass_path="nonexistent_compass_binary")
        assert probe.is_compass_installed() is False

    def test_find_compass_config_in_ancestor(self, temp_dir: Path) -> None:
        (temp_dir / "config.rb").write_text('css_dir = "css"\n')
        nested = temp_dir / "sass" / "components"
        nested.mkdir(parents=True)

        probe = SystemEnvironmentProbe()
        assert probe.find_compass_config(nested) == (temp_dir / "config.rb").resolve()
        assert probe.is_compass_project(nested) is True

    def test_no_compass_config(self, temp_dir: Path) -> None:
        probe = SystemEnvironmentProbe()
        found = probe.find_compass_config(temp_dir)
        # An unrelated config.rb higher up the real filesystem is not expected
        assert found is None or not found.is_relative_to(temp_dir.resolve())

    def test_sass_gem_executable(self, temp_dir: Path) -> None:
        (temp_dir / "bin").mkdir()
        (temp_dir / "bin" / "sass").write_text("#!/bin/sh\n")

        probe = SystemEnvironmentProbe()
        assert probe.sass_gem_executable(temp_dir) == temp_dir / "bin" / "sass"

    def test_sass_gem_prefers_batch_launcher(self, temp_dir: Path) -> None:
        (temp_dir / "bin").mkdir()
        (temp_dir / "bin" / "sass").write_text("")
        (temp_dir / "bin" / "sass.bat").write_text("")

        probe = SystemEnvironmentProbe()
        assert probe.sass_gem_executable(temp_dir) == temp_dir / "bin" / "sass.bat"

    def test_sass_gem_missing(self, temp_dir: Path) -> None:
        probe = SystemEnvironmentProbe()
        assert probe.sass_gem_executable(temp_dir) is None
        assert probe.sass_gem_executable(temp_dir / "missing") is None

    def test_read_compass_settings(self, temp_dir: Path) -> None:
        config = temp_dir / "config.rb"
        config.write_text(
            'http_path = "/"\n'
            "css_dir = 'public/css'\n"
            'sass_dir = "src/sass"\n'
            "line_comments = false\n"
        )
        settings = read_compass_settings(config)
        assert settings["css_dir"] == "public/css"
        assert settings["sass_dir"] == "src/sass"
        assert "line_comments" not in settings


class TestNativeBackend:
    """Test the libsass backend."""

    def test_always_available(self, make_settings) -> None:
        assert NativeBackend(make_settings()).is_available() is True

    def test_output_path(self, make_settings) -> None:
        backend = NativeBackend(make_settings())
        assert backend.get_output_path(Path("/web/site.scss")) == Path("/web/site.css")

    def test_output_path_with_override(self, make_settings) -> None:
        backend = NativeBackend(make_settings(css_output_directory="/build"))
        assert backend.get_output_path(Path("/web/site.scss")) == Path("/build/site.css")

    @pytest.mark.asyncio
    async def test_compile_writes_css_with_bom(self, temp_dir: Path, make_settings) -> None:
        source = temp_dir / "site.scss"
        source.write_text("$brand: red;\na { color: $brand; }\n")
        backend = NativeBackend(make_settings())
        output = backend.get_output_path(source)

        await backend.compile(source, output)

        assert output.read_bytes().startswith(b"\xef\xbb\xbf")
        assert "color: red" in output.read_text(encoding=CSS_ENCODING)

    @pytest.mark.asyncio
    async def test_compile_resolves_partials(self, sample_project: Path, make_settings) -> None:
        backend = NativeBackend(make_settings())
        source = sample_project / "site.scss"
        output = backend.get_output_path(source)

        await backend.compile(source, output)

        assert "color: red" in output.read_text(encoding=CSS_ENCODING)

    @pytest.mark.asyncio
    async def test_compile_creates_output_directory(self, temp_dir: Path, make_settings) -> None:
        source = temp_dir / "site.scss"
        source.write_text("a { color: red; }\n")
        backend = NativeBackend(make_settings(css_output_directory="out/css"))
        output = backend.get_output_path(source)

        await backend.compile(source, output)

        assert output == temp_dir / "out" / "css" / "site.css"
        assert output.exists()

    @pytest.mark.asyncio
    async def test_compile_error(self, temp_dir: Path, make_settings) -> None:
        source = temp_dir / "broken.scss"
        source.write_text("a { color: $undefined; }\n")
        backend = NativeBackend(make_settings())

        with pytest.raises(CompileError, match="undefined|Undefined"):
            await backend.compile(source, backend.get_output_path(source))

        assert not (temp_dir / "broken.css").exists()


class TestGemBackend:
    """Test the Ruby sass gem backend."""

    def test_availability_follows_probe(self, make_settings) -> None:
        options = make_settings(ruby_install_path="/opt/ruby")
        assert GemBackend(options, probe=FakeProbe()).is_available() is False

        probe = FakeProbe(gem_executable=Path("/opt/ruby/bin/sass"))
        assert GemBackend(options, probe=probe).is_available() is True

    def test_unavailable_without_ruby_path(self, make_settings) -> None:
        probe = FakeProbe(gem_executable=Path("/opt/ruby/bin/sass"))
        assert GemBackend(make_settings(), probe=probe).is_available() is False

    def test_build_command(self, make_settings) -> None:
        probe = FakeProbe(gem_executable=Path("/opt/ruby/bin/sass"))
        backend = GemBackend(
            make_settings(ruby_install_path="/opt/ruby", include_source_comments=True),
            probe=probe,
        )

        cmd = backend.build_command(Path("/web/site.scss"), Path("/web/site.css"))

        assert cmd[0] == str(Path("/opt/ruby/bin/sass"))
        assert "--line-comments" in cmd
        assert cmd[-2:] == [str(Path("/web/site.scss")), str(Path("/web/site.css"))]

    @pytest.mark.asyncio
    async def test_compile_success(self, temp_dir: Path, make_settings) -> None:
        source = temp_dir / "site.scss"
        source.write_text("a { color: red; }\n")
        output = temp_dir / "site.css"
        probe = FakeProbe(gem_executable=Path("/opt/ruby/bin/sass"))
        backend = GemBackend(make_settings(ruby_install_path="/opt/ruby"), probe=probe)

        async def fake_run(cmd, cwd=None):
            output.write_text("a {\n  color: red; }\n")
            return (0, "", "")

        with patch.object(backend, "run_command", side_effect=fake_run) as run:
            await backend.compile(source, output)

        run.assert_called_once()
        assert "--line-comments" not in run.call_args.args[0]

    @pytest.mark.asyncio
    async def test_compile_failure_carries_output(self, temp_dir: Path, make_settings) -> None:
        source = temp_dir / "site.scss"
        source.write_text("a { color: $nope; }\n")
        probe = FakeProbe(gem_executable=Path("/opt/ruby/bin/sass"))
        backend = GemBackend(make_settings(ruby_install_path="/opt/ruby"), probe=probe)
        backend.run_command = AsyncMock(return_value=(65, "", "Error: Undefined variable: \"$nope\".\n"))

        with pytest.raises(CompileError) as exc_info:
            await backend.compile(source, temp_dir / "site.css")

        assert exc_info.value.return_code == 65
        assert "Undefined variable" in exc_info.value.output
        assert "Undefined variable" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_compile_missing_output(self, temp_dir: Path, make_settings) -> None:
        source = temp_dir / "site.scss"
        source.write_text("a { color: red; }\n")
        probe = FakeProbe(gem_executable=Path("/opt/ruby/bin/sass"))
        backend = GemBackend(make_settings(ruby_install_path="/opt/ruby"), probe=probe)
        backend.run_command = AsyncMock(return_value=(0, "", ""))

        with pytest.raises(CompileError, match="did not write"):
            await backend.compile(source, temp_dir / "site.css")


class TestConventionBackend:
    """Test the Compass convention backend."""

    @pytest.fixture
    def compass_project(self, temp_dir: Path) -> Path:
        project = temp_dir / "compass"
        (project / "scss" / "pages").mkdir(parents=True)
        (project / "config.rb").write_text('css_dir = "css"\nsass_dir = "scss"\n')
        (project / "scss" / "pages" / "home.scss").write_text("a { color: red; }\n")
        return project

    def test_availability(self, compass_project: Path) -> None:
        config = compass_project / "config.rb"
        directory = compass_project / "scss"

        assert ConventionBackend(directory, probe=FakeProbe(True, config)).is_available()
        assert not ConventionBackend(directory, probe=FakeProbe(False, config)).is_available()
        assert not ConventionBackend(directory, probe=FakeProbe(True, None)).is_available()

    def test_availability_asks_probe_about_directory(self) -> None:
        probe = MagicMock()
        probe.is_compass_installed.return_value = True
        probe.is_compass_project.return_value = False

        assert ConventionBackend(Path("/web/scss"), probe=probe).is_available() is False
        probe.is_compass_project.assert_called_once_with(Path("/web/scss"))

    def test_output_follows_project_layout(self, compass_project: Path) -> None:
        source = compass_project / "scss" / "pages" / "home.scss"
        backend = ConventionBackend(
            source.parent, probe=FakeProbe(True, compass_project / "config.rb")
        )

        output = backend.get_output_path(source)

        assert output.resolve() == (compass_project / "css" / "pages" / "home.css").resolve()

    def test_output_defaults(self, temp_dir: Path) -> None:
        (temp_dir / "config.rb").write_text("# empty compass config\n")
        source = temp_dir / "sass" / "main.scss"
        backend = ConventionBackend(source.parent, probe=FakeProbe(True, temp_dir / "config.rb"))

        assert backend.get_output_path(source) == temp_dir / "stylesheets" / "main.css"

    def test_output_without_project(self) -> None:
        backend = ConventionBackend(Path("/web"), probe=FakeProbe(True, None))
        assert backend.get_output_path(Path("/web/site.scss")) is None

    @pytest.mark.asyncio
    async def test_compile_runs_in_project_root(self, compass_project: Path) -> None:
        source = compass_project / "scss" / "pages" / "home.scss"
        backend = ConventionBackend(
            source.parent, probe=FakeProbe(True, compass_project / "config.rb")
        )
        backend.run_command = AsyncMock(return_value=(0, "", ""))

        await backend.compile(source, backend.get_output_path(source))

        cmd = backend.run_command.call_args.args[0]
        assert cmd[:3] == ["compass", "compile", "--quiet"]
        assert backend.run_command.call_args.kwargs["cwd"] == compass_project

    @pytest.mark.asyncio
    async def test_compile_failure(self, compass_project: Path) -> None:
        source = compass_project / "scss" / "pages" / "home.scss"
        backend = ConventionBackend(
            source.parent, probe=FakeProbe(True, compass_project / "config.rb")
        )
        backend.run_command = AsyncMock(return_value=(1, "error scss/pages/home.scss", ""))

        with pytest.raises(CompileError) as exc_info:
            await backend.compile(source, None)

        assert exc_info.value.return_code == 1
        assert "home.scss" in exc_info.value.output
