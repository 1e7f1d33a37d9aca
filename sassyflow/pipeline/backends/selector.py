"""Backend selection policy."""

from pathlib import Path

from sassyflow.core.config.settings import CompileSettings
from sassyflow.core.exceptions.errors import BackendUnavailableError
from sassyflow.core.logger.logger import get_logger
from sassyflow.pipeline.backends.base import BaseBackend
from sassyflow.pipeline.backends.convention import ConventionBackend
from sassyflow.pipeline.backends.gem import GemBackend
from sassyflow.pipeline.backends.native import NativeBackend
from sassyflow.pipeline.backends.probe import EnvironmentProbe, SystemEnvironmentProbe

logger = get_logger(__name__)


class BackendSelector:
    """
    Chooses the compiler backend for a document.

    Candidates are checked in priority order and the first available one
    wins:
    1. Compass, when installed and the directory is in a Compass project
    2. The Ruby sass gem, when the configured Ruby root contains it
    3. libsass
    """

    def __init__(self, probe: EnvironmentProbe | None = None) -> None:
        self.probe = probe or SystemEnvironmentProbe()

    def candidates(self, directory: Path, options: CompileSettings) -> list[BaseBackend]:
        return [
            ConventionBackend(directory, probe=self.probe),
            GemBackend(options, probe=self.probe),
            NativeBackend(options),
        ]

    def select(self, directory: Path, options: CompileSettings) -> BaseBackend:
        """
        Select a backend. Evaluated fresh on every call.

        Args:
            directory: Directory of the document being compiled.
            options: Compile settings snapshot.

        Returns:
            The first available backend.

        Raises:
            BackendUnavailableError: If no candidate is available.
        """
        for backend in self.candidates(directory, options):
            if backend.is_available():
                if options.debug_logging:
                    logger.debug(f"Selected {backend.name} backend for {directory}")
                return backend

        raise BackendUnavailableError(
            f"No compiler backend available for {directory}",
            details={"directory": str(directory)},
        )
