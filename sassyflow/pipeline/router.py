"""Save event routing.

Turns editor save notifications into compile requests: stylesheets are
compiled directly, partials fan out to every root document in their
project.
"""

from sassyflow.core.config.settings import CompileSettings
from sassyflow.core.logger.logger import get_logger
from sassyflow.models.pipeline import CompileRequest, SaveEvent, SourceDocument
from sassyflow.pipeline.project import ProjectGraph

logger = get_logger(__name__)


class SaveEventRouter:
    """Routes save events to compile requests."""

    def __init__(self, project_graph: ProjectGraph | None = None) -> None:
        """Initialize the router.

        Args:
            project_graph: Resolves root documents for partials. Without one,
                partial saves produce no requests.
        """
        self.project_graph = project_graph

    def route(self, event: SaveEvent, options: CompileSettings) -> list[CompileRequest]:
        """Decide which documents a save event should rebuild.

        Args:
            event: Notification from the editor.
            options: Compile settings snapshot.

        Returns:
            One request per root document to build, possibly empty.
        """
        if not event.is_save:
            return []

        if options.debug_logging:
            logger.debug(f"Detected file saved: {event.path}")

        if not options.generate_css_on_save:
            return []

        document = SourceDocument(path=event.path)
        if not document.is_stylesheet:
            return []

        if not document.is_partial:
            if options.debug_logging:
                logger.debug(f"Compiling: {event.path.name}")
            return [CompileRequest(document=document, requested_at=event.saved_at)]

        if options.debug_logging:
            logger.debug(f"Compiling all files referencing include file: {event.path.name}")

        if self.project_graph is None:
            return []

        requests = []
        for path in self.project_graph.resolve_root_documents(event.path):
            root = SourceDocument(path=path)
            if root.is_root:
                requests.append(CompileRequest(document=root, requested_at=event.saved_at))
        return requests
