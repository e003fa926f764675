"""
Data sources that deliver relationship records.

Every source exposes a single batch call, ``fetch_records()``. Sources do not
retry; failures are raised as ``DataSourceError`` and handled by the caller.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Protocol, runtime_checkable

import httpx
from neo4j import AsyncDriver, AsyncGraphDatabase
from neo4j.exceptions import DriverError, Neo4jError

from ..config import HttpSourceConfig, Neo4jConfig
from ..exceptions import DataSourceError
from .models import RawNode, RelationshipRecord

logger = logging.getLogger(__name__)

# Both directions so that every relationship is seen from either endpoint.
BIDIRECTIONAL_QUERY = """
MATCH (n)-[r]->(m) RETURN n, r, m
UNION
MATCH (n)<-[r]-(m) RETURN n, r, m
"""


@runtime_checkable
class GraphDataSource(Protocol):
    """Anything that can fetch a batch of relationship records."""

    async def fetch_records(self) -> List[RelationshipRecord]: ...


def parse_records(payload: Any) -> List[RelationshipRecord]:
    """
    Parse a JSON payload into relationship records.

    Accepts either a bare list of records or an object with a ``records``
    list. Entries that are not objects become records with no endpoints so
    the materializer can count them as skipped.
    """
    if isinstance(payload, dict):
        payload = payload.get("records")
    if not isinstance(payload, list):
        raise DataSourceError("Expected a list of relationship records")

    records = []
    for item in payload:
        if isinstance(item, dict):
            records.append(RelationshipRecord.from_dict(item))
        else:
            records.append(RelationshipRecord(source=None, target=None))
    return records


class Neo4jDataSource:
    """Fetches relationships from Neo4j with the async driver."""

    def __init__(
        self,
        config: Neo4jConfig,
        driver: Optional[AsyncDriver] = None,
        query: str = BIDIRECTIONAL_QUERY,
    ):
        self.config = config
        self.query = query
        self._driver = driver

    @property
    def driver(self) -> AsyncDriver:
        if self._driver is None:
            self._driver = AsyncGraphDatabase.driver(
                self.config.uri,
                auth=(self.config.username, self.config.password),
            )
        return self._driver

    async def fetch_records(self) -> List[RelationshipRecord]:
        logger.info(f"Querying relationships from {self.config.uri}")
        try:
            async with self.driver.session(database=self.config.database) as session:
                result = await session.run(self.query)
                rows = [row async for row in result]
        except (Neo4jError, DriverError) as e:
            raise DataSourceError(f"Neo4j query failed: {e}") from e

        records = [self._to_record(row) for row in rows]
        logger.debug(f"Neo4j returned {len(records)} relationship rows")
        return records

    async def close(self) -> None:
        if self._driver is not None:
            await self._driver.close()
            self._driver = None

    async def __aenter__(self) -> "Neo4jDataSource":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @classmethod
    def _to_record(cls, row: Any) -> RelationshipRecord:
        relationship = row.get("r")
        return RelationshipRecord(
            source=cls._to_raw_node(row.get("n")),
            target=cls._to_raw_node(row.get("m")),
            label=getattr(relationship, "type", "") or "",
        )

    @staticmethod
    def _to_raw_node(node: Any) -> Optional[RawNode]:
        if node is None:
            return None
        return RawNode(properties=dict(node.items()), ref=node.element_id)


class HttpDataSource:
    """Fetches relationship records from a JSON query service."""

    def __init__(
        self,
        config: HttpSourceConfig,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self._client = client

    def _build_client(self) -> httpx.AsyncClient:
        headers = {}
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return httpx.AsyncClient(timeout=self.config.timeout, headers=headers)

    async def fetch_records(self) -> List[RelationshipRecord]:
        logger.info(f"Fetching relationships from {self.config.url}")
        client = self._client or self._build_client()
        try:
            response = await client.get(self.config.url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise DataSourceError(f"Query service request failed: {e}") from e
        except ValueError as e:
            raise DataSourceError(f"Query service returned invalid JSON: {e}") from e
        finally:
            if self._client is None:
                await client.aclose()

        return parse_records(payload)


class JsonFileDataSource:
    """Reads relationship records from a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    async def fetch_records(self) -> List[RelationshipRecord]:
        try:
            with open(self.path, "r") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DataSourceError(f"Cannot read records from {self.path}: {e}") from e

        return parse_records(payload)
