"""Domain port definitions for adapters."""

from __future__ import annotations

from .file_storage import FileStorage
from .storage import Storage, StorageManager
from .transport import HTTPMethod, RemoteRequest, Transport, WooApiVersion

__all__ = [
    "FileStorage",
    "HTTPMethod",
    "RemoteRequest",
    "Storage",
    "StorageManager",
    "Transport",
    "WooApiVersion",
]
