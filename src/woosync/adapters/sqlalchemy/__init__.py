"""SQLAlchemy-backed record storage."""

from __future__ import annotations

from .manager import (
    SqlAlchemyStorageManager,
    StartupError,
    create_storage_engine,
    create_storage_manager,
)
from .mappings import create_all_tables, mapper_registry, start_mappers
from .storage import SqlAlchemyStorage

__all__ = [
    "SqlAlchemyStorage",
    "SqlAlchemyStorageManager",
    "StartupError",
    "create_all_tables",
    "create_storage_engine",
    "create_storage_manager",
    "mapper_registry",
    "start_mappers",
]
