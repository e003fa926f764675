"""
Relationship Graph Materializer

Turns directed relationship records from a graph query into a deduplicated
node/link graph suitable for force-directed visualization.
"""

from .models import RawNode, RelationshipRecord, Node, Edge, MaterializedGraph
from .identity import IdentityResolver
from .collectors import NodeDeduplicator, EdgeCollector
from .materializer import GraphMaterializer
from .sources import (
    GraphDataSource,
    Neo4jDataSource,
    HttpDataSource,
    JsonFileDataSource,
    parse_records,
)
from .visualization import to_force_graph, default_graph_config

__all__ = [
    'RawNode',
    'RelationshipRecord',
    'Node',
    'Edge',
    'MaterializedGraph',
    'IdentityResolver',
    'NodeDeduplicator',
    'EdgeCollector',
    'GraphMaterializer',
    'GraphDataSource',
    'Neo4jDataSource',
    'HttpDataSource',
    'JsonFileDataSource',
    'parse_records',
    'to_force_graph',
    'default_graph_config',
]
