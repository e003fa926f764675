"""
Keeps renderer highlight decorations in step with the highlight store.

The store is authoritative. A highlight is always recorded before it is
painted, so a decoration never exists without a backing record; the reverse
(a record whose decoration failed to paint) is tolerated.
"""

import logging
from enum import Enum, auto
from typing import Any, Optional

from .highlights import Highlight, HighlightStore
from .renderer import (
    HIGHLIGHT_KIND,
    SELECTED_EVENT,
    EventSubscription,
    Renderer,
    SelectionContents,
)

logger = logging.getLogger(__name__)


class SyncState(Enum):
    """Binding state of the synchronizer."""

    IDLE = auto()  # No renderer attached
    BOUND = auto()  # Listening to a renderer


class AnnotationSynchronizer:
    """
    Bridges a HighlightStore and a live renderer.

    Selection events create a store entry and a decoration once per range.
    Deleting a highlight retracts both. Rebinding to a new renderer releases
    the old subscription and repaints every highlight the store still holds.
    """

    def __init__(self, store: HighlightStore):
        self.store = store
        self._renderer: Optional[Renderer] = None
        self._subscription: Optional[EventSubscription] = None
        self._state = SyncState.IDLE

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def renderer(self) -> Optional[Renderer]:
        return self._renderer

    def bind(self, renderer: Renderer) -> None:
        """Attach to a renderer and decorate the retained highlights on it."""
        self.unbind()
        self._renderer = renderer
        self._subscription = EventSubscription(renderer, SELECTED_EVENT, self.handle_selection)
        self._state = SyncState.BOUND
        logger.info(f"Bound to renderer, redecorating {len(self.store)} highlights")

        for highlight in self.store:
            self._decorate(highlight)

    def unbind(self) -> None:
        if self._subscription is not None:
            self._subscription.release()
            self._subscription = None
        self._renderer = None
        self._state = SyncState.IDLE

    def handle_selection(self, range_id: str, contents: SelectionContents) -> bool:
        """
        Handle a renderer selection event.

        Returns:
            True if a new highlight was created
        """
        if self._state is not SyncState.BOUND:
            logger.debug(f"Ignoring selection {range_id}: no renderer bound")
            return False
        if range_id in self.store:
            logger.debug(f"Ignoring selection {range_id}: already highlighted")
            return False

        self.store.add(range_id, self._extract_text(range_id, contents))
        self._decorate(self.store.get(range_id))
        self._clear_selection(contents)
        return True

    def remove(self, range_id: str) -> bool:
        """Delete a highlight and retract its decoration."""
        removed = self.store.remove(range_id)
        if removed and self._renderer is not None:
            try:
                self._renderer.annotations.remove(range_id, HIGHLIGHT_KIND)
            except Exception as e:
                logger.warning(f"Could not retract decoration for {range_id}: {e}")
        logger.debug(f"Removed highlight {range_id}: {removed}")
        return removed

    def display(self, range_id: str) -> bool:
        """Navigate the renderer to an existing highlight."""
        if self._renderer is None or range_id not in self.store:
            return False
        self._renderer.display(range_id)
        return True

    def _decorate(self, highlight: Highlight) -> None:
        try:
            self._renderer.annotations.add(highlight.range_id, highlight.style())
        except Exception as e:
            logger.warning(f"Could not decorate {highlight.range_id}: {e}")

    @staticmethod
    def _extract_text(range_id: str, contents: Any) -> str:
        try:
            return str(contents.range(range_id))
        except Exception as e:
            logger.warning(f"Could not read text for {range_id}: {e}")
            return ""

    @staticmethod
    def _clear_selection(contents: Any) -> None:
        try:
            contents.clear_selection()
        except Exception as e:
            logger.debug(f"Could not clear native selection: {e}")
