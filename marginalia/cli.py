"""
CLI commands for materializing relationship graphs.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import cyclopts
from dotenv import load_dotenv
from rich.console import Console

from marginalia.config import HttpSourceConfig, load_config
from marginalia.exceptions import ConfigError
from marginalia.knowledge_graph import (
    GraphMaterializer,
    HttpDataSource,
    JsonFileDataSource,
    Neo4jDataSource,
    to_force_graph,
)

app = cyclopts.App(name="marginalia", help="Highlight and relationship graph tools")
console = Console(stderr=True)


@app.command
def graph(
    records: Annotated[
        Optional[Path], cyclopts.Parameter(help="JSON file of relationship records")
    ] = None,
    url: Annotated[
        Optional[str], cyclopts.Parameter(help="Query service URL returning records")
    ] = None,
    output: Annotated[
        Optional[Path], cyclopts.Parameter(help="Write the graph JSON here instead of stdout")
    ] = None,
    config: Annotated[
        Optional[Path], cyclopts.Parameter(help="Config file (default: ~/.marginalia/config.json)")
    ] = None,
    verbose: Annotated[bool, cyclopts.Parameter(help="Enable verbose logging")] = False,
):
    """Materialize a relationship graph and print it as JSON.

    Records are read from --records, fetched from --url, or queried from
    Neo4j using the configured connection, in that order of preference.

    Examples:
        marginalia graph --records records.json
        marginalia graph --url http://localhost:8000/relationships --output graph.json
        marginalia graph
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = load_config(config)
    except ConfigError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise SystemExit(1) from e

    if records is not None:
        source = JsonFileDataSource(records)
    elif url is not None:
        http = settings.http
        source = HttpDataSource(
            HttpSourceConfig(url=url, token=http.token if http else None)
        )
    elif settings.http is not None:
        source = HttpDataSource(settings.http)
    else:
        source = Neo4jDataSource(settings.neo4j)

    result = asyncio.run(_materialize(source))
    payload = json.dumps(to_force_graph(result), ensure_ascii=False, indent=2, default=str)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload, encoding="utf-8")
        console.print(f"[green]✓ Graph saved to {output.resolve()}[/green]")
    else:
        print(payload)

    console.print(
        f"nodes={len(result.nodes)} links={len(result.links)} skipped={result.skipped}"
    )
    return 0


async def _materialize(source):
    try:
        return await GraphMaterializer().materialize_from(source)
    finally:
        if isinstance(source, Neo4jDataSource):
            await source.close()


def main():
    load_dotenv()
    sys.exit(app())
