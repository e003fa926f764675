"""
Identity resolution for raw graph nodes.

Identities are derived from node properties in a fixed trust order: an
explicit ``id``, then ``human_readable_id``, then a synthesized
``Node_<ref>`` built from the source-internal reference.
"""

from typing import Callable, Iterable, List, Optional

from .models import RawNode

IdentityExtractor = Callable[[RawNode], Optional[str]]

FALLBACK_PREFIX = "Node_"


def _property_extractor(key: str) -> IdentityExtractor:
    def extract(node: RawNode) -> Optional[str]:
        value = node.properties.get(key)
        if value is None:
            return None
        if not str(value).strip():
            return None
        return str(value)

    extract.__name__ = f"extract_{key}"
    return extract


extract_id = _property_extractor("id")
extract_human_readable_id = _property_extractor("human_readable_id")


def extract_fallback(node: RawNode) -> str:
    """Synthesize an identity from the internal reference. Always succeeds."""
    return f"{FALLBACK_PREFIX}{node.ref}"


DEFAULT_EXTRACTORS: List[IdentityExtractor] = [extract_id, extract_human_readable_id]


class IdentityResolver:
    """Resolves a stable identity for a raw node.

    Extractors are tried in order and the first non-empty result wins. The
    fallback extractor is always tried last, so resolution never fails.
    """

    def __init__(self, extractors: Optional[Iterable[IdentityExtractor]] = None):
        self.extractors: List[IdentityExtractor] = list(
            DEFAULT_EXTRACTORS if extractors is None else extractors
        )

    def resolve(self, node: RawNode) -> str:
        for extractor in self.extractors:
            identity = extractor(node)
            if identity:
                return identity
        return extract_fallback(node)
