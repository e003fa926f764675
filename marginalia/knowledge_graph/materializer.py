"""
Batch transformation of relationship records into a deduplicated graph.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from .collectors import EdgeCollector, NodeDeduplicator
from .identity import IdentityResolver
from .models import MaterializedGraph, RelationshipRecord
from .sources import GraphDataSource

logger = logging.getLogger(__name__)

RecordLike = Union[RelationshipRecord, Mapping[str, Any]]


class GraphMaterializer:
    """
    Builds a ``{nodes, links}`` graph from directed relationship records.

    Records missing an endpoint are logged and skipped; the rest of the batch
    is still processed. Node identities come from the ``IdentityResolver``,
    nodes are deduplicated first-write-wins, and every complete record
    contributes exactly one link.
    """

    def __init__(self, resolver: Optional[IdentityResolver] = None):
        self.resolver = resolver or IdentityResolver()

    def materialize(self, records: Iterable[RecordLike]) -> MaterializedGraph:
        """
        Materialize a batch of records.

        Args:
            records: RelationshipRecord instances or mappings with
                ``source``/``target``/``label`` keys

        Returns:
            The complete MaterializedGraph
        """
        nodes = NodeDeduplicator()
        edges = EdgeCollector()
        skipped = 0

        for position, raw in enumerate(records):
            record = self._coerce(raw)
            if record is None or not record.is_complete():
                skipped += 1
                logger.warning(f"Skipping relationship record {position}: missing endpoint")
                continue

            source_id = self.resolver.resolve(record.source)
            target_id = self.resolver.resolve(record.target)
            nodes.add(source_id, record.source.properties)
            nodes.add(target_id, record.target.properties)
            edges.add(source_id, target_id, record.label)
            logger.debug(f"Materialized link {source_id} -{record.label}-> {target_id}")

        graph = MaterializedGraph(nodes=nodes.result(), links=edges.result(), skipped=skipped)
        logger.info(f"Materialized {graph}")
        return graph

    async def materialize_from(self, source: GraphDataSource) -> MaterializedGraph:
        """
        Fetch records from a data source and materialize them.

        A failing source yields an empty graph instead of an exception.
        """
        try:
            records = await source.fetch_records()
        except Exception as e:
            logger.error(f"Graph data source failed: {e}", exc_info=True)
            return MaterializedGraph.empty()

        return self.materialize(records)

    @staticmethod
    def _coerce(raw: Any) -> Optional[RelationshipRecord]:
        if isinstance(raw, RelationshipRecord):
            return raw
        if isinstance(raw, Mapping):
            return RelationshipRecord.from_dict(raw)
        return None
