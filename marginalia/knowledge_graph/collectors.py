"""
Accumulators used while materializing a graph.
"""

from typing import Any, Dict, List, Mapping

from .models import Edge, Node


class NodeDeduplicator:
    """Collects nodes keyed by identity; the first write wins."""

    def __init__(self):
        # dicts keep insertion order, which gives first-seen ordering
        self._nodes: Dict[str, Node] = {}

    def add(self, identity: str, attributes: Mapping[str, Any]) -> None:
        if identity in self._nodes:
            return
        self._nodes[identity] = Node(identity=identity, attributes=dict(attributes))

    def result(self) -> List[Node]:
        return list(self._nodes.values())

    def __contains__(self, identity: object) -> bool:
        return identity in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)


class EdgeCollector:
    """Collects directed edges without deduplication.

    Two identical records produce two edges; callers that need a simple
    graph must collapse them themselves.
    """

    def __init__(self):
        self._edges: List[Edge] = []

    def add(self, source: str, target: str, label: str) -> None:
        self._edges.append(Edge(source=source, target=target, label=label))

    def result(self) -> List[Edge]:
        return list(self._edges)

    def __len__(self) -> int:
        return len(self._edges)
