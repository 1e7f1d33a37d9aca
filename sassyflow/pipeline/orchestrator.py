"""Build orchestration for a single compile request.

Runs the staleness check, backend compile and post-processing
(registration, minification) for one root document. Every failure is
contained in the returned CompileResult; nothing propagates to the caller.
"""

import traceback
from datetime import datetime
from pathlib import Path

from sassyflow.core.config.settings import CompileSettings
from sassyflow.core.exceptions.errors import MinifyError
from sassyflow.core.logger.logger import get_logger
from sassyflow.models.pipeline import BuildAction, CompileRequest, CompileResult
from sassyflow.pipeline.backends.base import CSS_ENCODING
from sassyflow.pipeline.backends.selector import BackendSelector
from sassyflow.pipeline.minifier import CssMinifier
from sassyflow.pipeline.project import OutputRegistrar

logger = get_logger(__name__)

MINIFIED_SUFFIX = ".min.css"


def write_error_comment(error: BaseException, target: Path) -> None:
    """Replace a file with a css comment describing an error.

    Best effort: write failures are ignored.
    """
    trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    # a "*/" inside the message would close the comment early
    body = f"{error}\n{trace}".replace("*/", "* /")
    content = f"/*\n{body}*/\n"
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding=CSS_ENCODING)
    except OSError as e:
        logger.debug(f"Could not write error comment to {target}: {e}")


def local_time(value: datetime) -> datetime:
    """Normalise a timestamp to aware local time; naive values are local."""
    return value.astimezone()


class BuildOrchestrator:
    """Executes compile requests.

    Collaborators are injected so the same orchestrator serves concurrent
    requests; it holds no per-request state.
    """

    def __init__(
        self,
        selector: BackendSelector | None = None,
        registrar: OutputRegistrar | None = None,
        minifier: CssMinifier | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            selector: Backend selector. Defaults to probing the real system.
            registrar: Receives generated files; registration is skipped without one.
            minifier: Css compressor for .min.css output.
        """
        self.selector = selector or BackendSelector()
        self.registrar = registrar
        self.minifier = minifier or CssMinifier()

    @staticmethod
    def is_stale(request: CompileRequest) -> bool:
        """Whether a newer save has superseded the request.

        Missing or unreadable files are never stale; the backend reports them.
        """
        try:
            mtime = request.path.stat().st_mtime
        except OSError:
            return False
        modified = local_time(datetime.fromtimestamp(mtime))
        return modified > local_time(request.requested_at)

    async def execute(
        self,
        request: CompileRequest,
        options: CompileSettings,
    ) -> CompileResult | None:
        """Build one root document.

        Args:
            request: Document to build and when it was saved.
            options: Compile settings snapshot.

        Returns:
            The result, or None when the request was stale and dropped.
        """
        source = request.path
        self._trace(options, f"Beginning compile: {source}")

        if self.is_stale(request):
            self._trace(options, "Ignoring compile due to stale document.")
            return None

        result = CompileResult(source_path=source)
        try:
            backend = self.selector.select(source.parent, options)
            result.backend = backend.name
            result.output_path = backend.get_output_path(source)
            await backend.compile(source, result.output_path)
        except Exception as e:
            result.error = e
            logger.error(f"Failed to compile css: {e}")
            if options.replace_css_with_exception and result.output_path is not None:
                write_error_comment(e, result.output_path)
        else:
            output = result.output_path
            if output is not None:
                if self._should_register(options):
                    self._register(source, output, options, result)
                if options.generate_minified_css_on_save:
                    result.minified_path = self._minify(source, output, options, result)

        self._trace(options, "Compile complete.")
        return result

    def _should_register(self, options: CompileSettings) -> bool:
        return (
            self.registrar is not None
            and options.include_css_in_project
            and not options.has_output_directory
        )

    def _register(
        self,
        parent: Path,
        child: Path,
        options: CompileSettings,
        result: CompileResult,
    ) -> None:
        self._trace(options, f"Nesting {child.name} under {parent.name}")
        build_action = (
            BuildAction.CONTENT if options.include_css_in_project_output else BuildAction.NONE
        )
        try:
            self.registrar.add_nested_file(parent, child, build_action)
        except Exception as e:
            logger.warning(f"Failed to include {child.name} in project under {parent.name}: {e}")
            return
        result.registered.append(child)

    def _minify(
        self,
        source: Path,
        output: Path,
        options: CompileSettings,
        result: CompileResult,
    ) -> Path | None:
        self._trace(options, "Generating minified css file.")
        target = output.with_name(f"{source.stem}{MINIFIED_SUFFIX}")

        try:
            css = output.read_text(encoding=CSS_ENCODING)
            target.write_text(self.minifier.compress(css), encoding=CSS_ENCODING)
        except (MinifyError, OSError, ValueError) as e:
            logger.error(f"Failed to generate minified css file: {e}")
            if options.replace_css_with_exception:
                write_error_comment(e, target)
            return None

        if self._should_register(options):
            self._register(output, target, options, result)
        return target

    @staticmethod
    def _trace(options: CompileSettings, message: str) -> None:
        if options.debug_logging:
            logger.debug(message)
