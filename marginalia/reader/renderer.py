"""Contracts for the external document renderer.

The renderer paints the document, owns pagination and emits events. This
package only talks to it through the protocols below.
"""

import logging
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)

SELECTED_EVENT = "selected"
LOCATION_CHANGED_EVENT = "locationChanged"
HIGHLIGHT_KIND = "highlight"


class SelectionContents(Protocol):
    """Content accessor passed along with a selection event."""

    def range(self, range_id: str) -> Any: ...

    def clear_selection(self) -> None: ...


class Annotations(Protocol):
    def add(self, range_id: str, style: dict[str, str]) -> Any: ...

    def remove(self, range_id: str, kind: str) -> Any: ...


class LocationBook(Protocol):
    """The loaded document, able to build a location index."""

    async def generate_locations(self, chunk_size: int) -> Any: ...

    def location_from_marker(self, marker: Any) -> Optional[int]: ...

    def total_locations(self) -> int: ...


class EventEmitter(Protocol):
    def on(self, event: str, handler: Callable[..., Any]) -> Any: ...

    def off(self, event: str, handler: Callable[..., Any]) -> Any: ...


class Renderer(EventEmitter, Protocol):
    annotations: Annotations
    book: LocationBook

    def display(self, range_id: str) -> Any: ...


class EventSubscription:
    """A handler registration that is released exactly once.

    The handler is registered on construction. ``release()`` unregisters it
    and is safe to call repeatedly; the subscription also works as a context
    manager.
    """

    def __init__(self, emitter: EventEmitter, event: str, handler: Callable[..., Any]):
        self.emitter = emitter
        self.event = event
        self.handler = handler
        emitter.on(event, handler)
        self._active = True
        logger.debug(f"Subscribed to renderer event '{event}'")

    @property
    def active(self) -> bool:
        return self._active

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        self.emitter.off(self.event, self.handler)
        logger.debug(f"Released renderer event '{self.event}'")

    def __enter__(self) -> "EventSubscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
