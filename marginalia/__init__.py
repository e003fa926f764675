"""Highlight synchronization and relationship graph materialization."""

__version__ = "0.1.0"
