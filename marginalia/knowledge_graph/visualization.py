"""
Shapes a materialized graph for a force-directed graph widget.
"""

from typing import Any, Dict

from .models import MaterializedGraph


def to_force_graph(graph: MaterializedGraph) -> Dict[str, Any]:
    """Convert a graph into ``{"nodes", "links"}`` keyed by node identity.

    Every node gets ``id`` and ``name`` equal to its identity, which the
    widget uses as its key; node properties with those names are
    overwritten. Links keep direction and label and are passed through even
    when they dangle.
    """
    nodes: Dict[str, Dict[str, Any]] = {}
    for node in graph.nodes:
        nodes[node.identity] = {**node.to_dict(), 'id': node.identity}

    return {
        'nodes': list(nodes.values()),
        'links': [
            {'source': link.source, 'target': link.target, 'label': link.label}
            for link in graph.links
        ],
    }


def default_graph_config() -> Dict[str, Any]:
    """Default widget settings."""
    return {
        'nodeHighlightBehavior': True,
        'node': {
            'color': 'lightgreen',
            'size': 200,
            'highlightStrokeColor': 'blue',
            'labelProperty': 'name',
        },
        'link': {
            'highlightColor': 'lightblue',
        },
        'height': 1000,
        'width': 1000,
    }
