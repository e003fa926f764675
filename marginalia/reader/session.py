"""
Per-document reader state.

A ReaderSession owns everything tied to one open document: the renderer
binding, the location index and the current page label. The highlight store
is passed in so highlights survive a document reload.
"""

import logging
from typing import Any, Optional

from ..config import ReaderConfig
from .highlights import HighlightStore
from .locator import LocationIndex, PageLocator
from .renderer import LOCATION_CHANGED_EVENT, EventSubscription, Renderer
from .synchronizer import AnnotationSynchronizer

logger = logging.getLogger(__name__)


class ReaderSession:
    """Binds a renderer to the highlight store and the page locator."""

    def __init__(
        self,
        config: Optional[ReaderConfig] = None,
        store: Optional[HighlightStore] = None,
    ):
        self.config = config or ReaderConfig()
        self.store = store if store is not None else HighlightStore(self.config.default_color)
        self.synchronizer = AnnotationSynchronizer(self.store)
        self.locator = PageLocator()
        self.location: Any = None
        self.page_label = ""
        self._renderer: Optional[Renderer] = None
        self._location_subscription: Optional[EventSubscription] = None

    @property
    def renderer(self) -> Optional[Renderer]:
        return self._renderer

    def attach(self, renderer: Renderer) -> None:
        """Start a session on a (possibly reloaded) renderer."""
        self.detach()
        self._renderer = renderer
        self.synchronizer.bind(renderer)
        self._location_subscription = EventSubscription(
            renderer, LOCATION_CHANGED_EVENT, self.location_changed
        )

    def detach(self) -> None:
        if self._location_subscription is not None:
            self._location_subscription.release()
            self._location_subscription = None
        self.synchronizer.unbind()
        self.locator.reset()
        self._renderer = None
        self.location = None
        self.page_label = ""

    def location_changed(self, marker: Any) -> None:
        self.location = marker
        self.page_label = self.locator.locate(marker)

    async def prepare_locations(self) -> bool:
        """
        Build the location index for the attached document.

        Returns:
            True if the index is ready for the current renderer
        """
        renderer = self._renderer
        if renderer is None:
            logger.warning("Cannot build locations: no renderer attached")
            return False

        try:
            index = await LocationIndex.build(renderer.book, self.config.location_chunk_size)
        except Exception as e:
            logger.error(f"Failed to build location index: {e}", exc_info=True)
            return False

        if renderer is not self._renderer:
            # The document changed while the index was being built.
            logger.debug("Discarding location index for a detached renderer")
            return False

        self.locator.set_index(index)
        if self.location is not None:
            self.page_label = self.locator.locate(self.location)
        return True
