"""
Data models for relationship graphs.
"""

from typing import List, Optional, Dict, Any, Mapping, Union
from dataclasses import dataclass, field


NodeRef = Union[str, int, None]


@dataclass
class RawNode:
    """A node as delivered by a data source, before identity resolution."""
    properties: Dict[str, Any] = field(default_factory=dict)
    ref: NodeRef = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RawNode':
        """Create a raw node from a JSON-style mapping.

        Mappings with a ``properties`` key are treated as wrapped nodes
        (``{"ref": ..., "properties": {...}}``); anything else is taken as the
        property map itself.
        """
        if isinstance(data.get('properties'), Mapping):
            return cls(properties=dict(data['properties']), ref=data.get('ref'))
        return cls(properties=dict(data))


def _as_raw_node(value: Any) -> Optional[RawNode]:
    if isinstance(value, RawNode):
        return value
    if isinstance(value, Mapping):
        return RawNode.from_dict(value)
    return None


@dataclass
class RelationshipRecord:
    """One directed relationship as returned by a graph query."""
    source: Optional[RawNode]
    target: Optional[RawNode]
    label: str = ""

    def __post_init__(self):
        """Normalize endpoints; anything other than a node or mapping is missing."""
        self.source = _as_raw_node(self.source)
        self.target = _as_raw_node(self.target)
        self.label = "" if self.label is None else str(self.label)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RelationshipRecord':
        """Create a record from a mapping; non-mapping endpoints become None."""
        return cls(
            source=data.get('source'),
            target=data.get('target'),
            label=data.get('label'),
        )

    def is_complete(self) -> bool:
        """Check whether both endpoints are present."""
        return self.source is not None and self.target is not None


@dataclass
class Node:
    """A deduplicated graph node."""
    identity: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the visualization shape; ``name`` is always the identity."""
        return {**self.attributes, 'name': self.identity}

    def __repr__(self):
        return f"Node({self.identity})"


@dataclass
class Edge:
    """A directed, labelled link between two node identities."""
    source: str
    target: str
    label: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source': self.source,
            'target': self.target,
            'relationship': self.label,
        }

    def __repr__(self):
        return f"Edge({self.source}-{self.label}->{self.target})"


@dataclass
class MaterializedGraph:
    """Result of materializing a batch of relationship records."""
    nodes: List[Node] = field(default_factory=list)
    links: List[Edge] = field(default_factory=list)
    skipped: int = 0

    @classmethod
    def empty(cls) -> 'MaterializedGraph':
        return cls()

    def is_empty(self) -> bool:
        return not (self.nodes or self.links)

    def node_ids(self) -> List[str]:
        return [node.identity for node in self.nodes]

    def dangling_links(self) -> List[Edge]:
        """Links that reference an identity outside the node set."""
        known = set(self.node_ids())
        return [link for link in self.links
                if link.source not in known or link.target not in known]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to ``{"nodes": [...], "links": [...]}``."""
        return {
            'nodes': [node.to_dict() for node in self.nodes],
            'links': [link.to_dict() for link in self.links],
        }

    def __repr__(self):
        return (f"MaterializedGraph(nodes={len(self.nodes)}, "
                f"links={len(self.links)}, skipped={self.skipped})")
