"""Configuration loading for graph sources and the reader.

Configuration comes from ``~/.marginalia/config.json`` (or an explicit path)
with ``${VAR}`` / ``${VAR:-default}`` environment references expanded. When a
section is missing, the Neo4j settings fall back to the ``NEO4J_*``
environment variables.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import ConfigError

__all__ = [
    "MarginaliaConfig",
    "Neo4jConfig",
    "HttpSourceConfig",
    "ReaderConfig",
    "load_config",
    "expand_env_vars",
    "DEFAULT_CONFIG_PATH",
]

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".marginalia" / "config.json"

# ${NAME} or ${NAME:-fallback}
_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::-(?P<fallback>[^}]*))?\}")


def _substitute(match: re.Match) -> str:
    return os.environ.get(match["name"], match["fallback"] or "")


def expand_env_vars(value: Any) -> Any:
    """Substitute environment references in config values.

    Strings are expanded in place; dicts and lists are walked so every
    nested string is expanded too. An unset variable without a fallback
    becomes an empty string.
    """
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(_substitute, value)
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


@dataclass
class Neo4jConfig:
    """Connection settings for the Neo4j relationship source."""

    uri: str = "bolt://localhost:7687"
    username: str = "neo4j"
    password: str = ""
    database: str | None = None

    @classmethod
    def from_env(cls) -> "Neo4jConfig":
        return cls(
            uri=os.environ.get("NEO4J_URI", cls.uri),
            username=os.environ.get("NEO4J_USERNAME", cls.username),
            password=os.environ.get("NEO4J_PASSWORD", cls.password),
            database=os.environ.get("NEO4J_DATABASE") or None,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Neo4jConfig":
        defaults = cls.from_env()
        return cls(
            uri=data.get("uri", defaults.uri),
            username=data.get("username", defaults.username),
            password=data.get("password", defaults.password),
            database=data.get("database", defaults.database),
        )


@dataclass
class HttpSourceConfig:
    """Settings for an HTTP relationship query service."""

    url: str
    token: str | None = None
    timeout: float = 30.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HttpSourceConfig":
        if not data.get("url"):
            raise ConfigError("http source requires a 'url'")
        return cls(
            url=data["url"],
            token=data.get("token") or None,
            timeout=float(data.get("timeout", 30.0)),
        )


@dataclass
class ReaderConfig:
    """Settings for reader sessions."""

    location_chunk_size: int = 1024
    default_color: str = "yellow"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReaderConfig":
        return cls(
            location_chunk_size=int(data.get("location_chunk_size", 1024)),
            default_color=data.get("default_color", "yellow"),
        )


@dataclass
class MarginaliaConfig:
    """Complete configuration."""

    neo4j: Neo4jConfig = field(default_factory=Neo4jConfig.from_env)
    http: HttpSourceConfig | None = None
    reader: ReaderConfig = field(default_factory=ReaderConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MarginaliaConfig":
        http_data = data.get("http")
        return cls(
            neo4j=Neo4jConfig.from_dict(data.get("neo4j", {})),
            http=HttpSourceConfig.from_dict(http_data) if http_data else None,
            reader=ReaderConfig.from_dict(data.get("reader", {})),
        )


def load_config(path: Path | None = None) -> MarginaliaConfig:
    """Load configuration from disk, falling back to environment defaults.

    Args:
        path: Config file path. Defaults to ``~/.marginalia/config.json``.

    Returns:
        MarginaliaConfig instance.

    Raises:
        ConfigError: The file exists but is not a valid JSON object.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using environment")
        return MarginaliaConfig()

    try:
        data = json.loads(config_path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a JSON object")

    return MarginaliaConfig.from_dict(expand_env_vars(data))
