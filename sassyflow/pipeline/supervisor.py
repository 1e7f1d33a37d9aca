"""
Build Supervisor

Runs compile requests as independent background tasks so the caller
delivering save events is never blocked by a compile.
"""

import asyncio
from typing import Callable

from sassyflow.core.config.settings import CompileSettings, get_settings
from sassyflow.core.logger.logger import get_logger
from sassyflow.models.pipeline import CompileRequest, CompileResult, SaveEvent
from sassyflow.pipeline.orchestrator import BuildOrchestrator
from sassyflow.pipeline.router import SaveEventRouter


def _current_compile_settings() -> CompileSettings:
    return get_settings().compile


class BuildSupervisor:
    """
    Spawns and supervises one task per compile request.

    The supervisor:
    1. Reads a fresh settings snapshot per save event
    2. Routes the event to compile requests
    3. Runs each request as its own asyncio task
    4. Logs and records any uncaught failure instead of propagating it
    """

    def __init__(
        self,
        router: SaveEventRouter,
        orchestrator: BuildOrchestrator,
        settings_provider: Callable[[], CompileSettings] = _current_compile_settings,
        on_result: Callable[[CompileResult], None] | None = None,
    ):
        """
        Initialize the supervisor.

        Args:
            router: Turns save events into compile requests.
            orchestrator: Executes compile requests.
            settings_provider: Returns the settings snapshot for an event.
            on_result: Callback for every finished request.
        """
        self.logger = get_logger(__name__)
        self.router = router
        self.orchestrator = orchestrator
        self.settings_provider = settings_provider
        self.on_result = on_result

        self._tasks: set[asyncio.Task[CompileResult]] = set()
        self._results: list[CompileResult] = []

    @property
    def running_count(self) -> int:
        """Number of compile tasks still in flight."""
        return len(self._tasks)

    def submit(self, event: SaveEvent) -> list[asyncio.Task[CompileResult]]:
        """
        Schedule builds for a save event. Must be called from the event loop.

        Args:
            event: Notification from the editor.

        Returns:
            The spawned tasks, one per compile request.
        """
        try:
            options = self.settings_provider()
            requests = self.router.route(event, options)
        except Exception as e:
            self.logger.error(f"Failed to route save of {event.path}: {e}")
            return []

        tasks = []
        for request in requests:
            task = asyncio.create_task(self._run(request, options))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            tasks.append(task)
        return tasks

    async def _run(self, request: CompileRequest, options: CompileSettings) -> CompileResult:
        try:
            result = await self.orchestrator.execute(request, options)
        except Exception as e:
            self.logger.exception(f"Unhandled exception while compiling {request.path}")
            result = CompileResult(source_path=request.path, error=e)

        if result is None:
            result = CompileResult(
                source_path=request.path,
                skipped=True,
                skip_reason="Superseded by a newer save",
            )

        if self.on_result is None:
            self._results.append(result)
            return result

        try:
            self.on_result(result)
        except Exception as e:
            self.logger.warning(f"Result callback failed: {e}")
        return result

    async def drain(self) -> list[CompileResult]:
        """
        Wait for every in-flight task.

        Returns:
            Results collected since the previous drain. Results handed to
            on_result or returned by build are not collected.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

        results, self._results = self._results, []
        return results

    async def build(self, event: SaveEvent) -> list[CompileResult]:
        """Submit an event and wait for its builds to finish."""
        tasks = self.submit(event)
        if not tasks:
            return []
        results = list(await asyncio.gather(*tasks))
        returned = {id(result) for result in results}
        self._results = [r for r in self._results if id(r) not in returned]
        return results
