"""
Exceptions for Marginalia.
"""


class MarginaliaError(Exception):
    """Base exception for marginalia operations."""


class DataSourceError(MarginaliaError):
    """Raised when a graph data source cannot deliver records."""


class ConfigError(MarginaliaError):
    """Raised when a configuration file cannot be read or is invalid."""
