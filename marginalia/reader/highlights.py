"""
Highlight records and the store that owns them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union


class HighlightColor(str, Enum):
    """Available highlight colors."""
    YELLOW = "yellow"
    LIGHTGREEN = "lightgreen"
    LIGHTBLUE = "lightblue"
    PINK = "pink"


ColorLike = Union[HighlightColor, str]


def to_color(color: ColorLike) -> HighlightColor:
    """Coerce a color name to ``HighlightColor``; unknown names raise ValueError."""
    return HighlightColor(color)


@dataclass(frozen=True)
class Highlight:
    """A highlighted text range."""
    range_id: str
    text: str
    color: HighlightColor = HighlightColor.YELLOW

    def preview(self, limit: int = 30) -> str:
        """Short label used in the bookmark list."""
        return f"{self.text[:limit]}..."

    def style(self) -> Dict[str, str]:
        """Renderer decoration style."""
        return {'fill': self.color.value}


class HighlightStore:
    """
    Ordered collection of highlights with at most one entry per range.

    Insertion order is the bookmark display order. The active color only
    applies to highlights added after it is set.
    """

    def __init__(self, active_color: ColorLike = HighlightColor.YELLOW):
        self._highlights: Dict[str, Highlight] = {}
        self._active_color = to_color(active_color)

    @property
    def active_color(self) -> HighlightColor:
        return self._active_color

    def set_active_color(self, color: ColorLike) -> None:
        self._active_color = to_color(color)

    def add(self, range_id: str, text: str, color: Optional[ColorLike] = None) -> bool:
        """
        Add a highlight unless one already exists for ``range_id``.

        Returns:
            True if the highlight was added, False if the range was taken
        """
        if range_id in self._highlights:
            return False
        resolved = self._active_color if color is None else to_color(color)
        self._highlights[range_id] = Highlight(range_id=range_id, text=text, color=resolved)
        return True

    def remove(self, range_id: str) -> bool:
        return self._highlights.pop(range_id, None) is not None

    def get(self, range_id: str) -> Optional[Highlight]:
        return self._highlights.get(range_id)

    def list(self, order: str = "asc") -> List[Highlight]:
        """
        List highlights in insertion order.

        Args:
            order: "asc" for oldest first, "desc" for newest first
        """
        if order not in ("asc", "desc"):
            raise ValueError(f"Unknown sort order: {order}")
        highlights = list(self._highlights.values())
        if order == "desc":
            highlights.reverse()
        return highlights

    def __contains__(self, range_id: object) -> bool:
        return range_id in self._highlights

    def __len__(self) -> int:
        return len(self._highlights)

    def __iter__(self) -> Iterator[Highlight]:
        return iter(list(self._highlights.values()))

    def __repr__(self):
        return f"HighlightStore(highlights={len(self._highlights)}, color={self._active_color.value})"
