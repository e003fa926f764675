"""
Page numbers for renderer positions.
"""

import logging
from typing import Any, Callable, Optional

from .renderer import LocationBook

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024


class LocationIndex:
    """Immutable mapping from position markers to zero-based page ordinals."""

    def __init__(self, lookup: Callable[[Any], Optional[int]], total: int):
        self._lookup = lookup
        self._total = max(int(total or 0), 0)

    @classmethod
    async def build(cls, book: LocationBook, chunk_size: int = DEFAULT_CHUNK_SIZE) -> "LocationIndex":
        """Generate the document's locations and wrap the result."""
        await book.generate_locations(chunk_size)
        total = book.total_locations()
        logger.info(f"Location index ready: {total} locations")
        return cls(book.location_from_marker, total)

    @property
    def total(self) -> int:
        return self._total

    def ordinal(self, marker: Any) -> Optional[int]:
        try:
            value = self._lookup(marker)
        except Exception as e:
            logger.debug(f"Location lookup failed for {marker!r}: {e}")
            return None
        return value if isinstance(value, int) else None


class PageLocator:
    """Formats ``Page n of total`` once a LocationIndex is available."""

    def __init__(self, index: Optional[LocationIndex] = None):
        self._index = index

    @property
    def ready(self) -> bool:
        return self._index is not None

    def set_index(self, index: LocationIndex) -> None:
        self._index = index

    def reset(self) -> None:
        self._index = None

    def locate(self, marker: Any) -> str:
        """
        Describe the page for a position marker.

        Returns an empty string before the index is ready, for an empty
        index, and for markers the index cannot place. Ordinals past the end
        are clamped to the last page.
        """
        if self._index is None or self._index.total == 0:
            return ""

        ordinal = self._index.ordinal(marker)
        if ordinal is None or ordinal < 0:
            return ""

        page = min(ordinal + 1, self._index.total)
        return f"Page {page} of {self._index.total}"
