"""Filesystem watching as a save notification source.

watchdog reports changes on its own thread; events are handed to the
supervisor on the asyncio loop.
"""

import asyncio
from datetime import datetime
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from sassyflow.core.logger.logger import get_logger
from sassyflow.models.pipeline import SaveEvent
from sassyflow.pipeline.supervisor import BuildSupervisor

logger = get_logger(__name__)


class ScssChangeHandler(FileSystemEventHandler):
    """Forwards file writes to a BuildSupervisor."""

    def __init__(self, loop: asyncio.AbstractEventLoop, supervisor: BuildSupervisor) -> None:
        super().__init__()
        self.loop = loop
        self.supervisor = supervisor

    def to_save_event(self, event: FileSystemEvent) -> SaveEvent | None:
        if event.is_directory:
            return None
        path = event.dest_path if event.event_type == "moved" else event.src_path
        if isinstance(path, bytes):
            path = path.decode()
        return SaveEvent(path=Path(path), saved_at=datetime.now().astimezone())

    def dispatch_save(self, event: FileSystemEvent) -> None:
        save = self.to_save_event(event)
        if save is not None:
            self.loop.call_soon_threadsafe(self.supervisor.submit, save)

    def on_modified(self, event: FileSystemEvent) -> None:
        self.dispatch_save(event)

    def on_created(self, event: FileSystemEvent) -> None:
        self.dispatch_save(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        # atomic saves rename a temporary file over the stylesheet
        self.dispatch_save(event)


async def watch_directory(
    directory: Path,
    supervisor: BuildSupervisor,
    stop: asyncio.Event | None = None,
) -> None:
    """Watch a directory tree until stopped or cancelled.

    Args:
        directory: Root of the tree to watch.
        supervisor: Receives a SaveEvent for every written file.
        stop: Optional event ending the watch.
    """
    stop = stop or asyncio.Event()
    handler = ScssChangeHandler(asyncio.get_running_loop(), supervisor)
    observer = Observer()
    observer.schedule(handler, str(directory), recursive=True)
    observer.start()
    logger.info(f"Watching for SCSS changes in: {directory}")

    try:
        await stop.wait()
    finally:
        observer.stop()
        observer.join()
        await supervisor.drain()
