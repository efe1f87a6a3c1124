"""
Data access module.

This package handles all I/O: the remote module catalog and the durable
record storage.
"""

from .catalog import CatalogClient, create_retry_session
from .storage import JsonFileStorage
from .store import ProgramStateStore

__all__ = ["CatalogClient", "create_retry_session", "JsonFileStorage", "ProgramStateStore"]
