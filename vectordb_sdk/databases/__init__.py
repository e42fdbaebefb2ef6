"""Database module."""

from vectordb_sdk.databases.models import (
    Capability,
    DatabaseInfo,
    DatabaseKind,
    DropDatabaseResult,
    RebuildIndexResult,
)
from vectordb_sdk.databases.service import (
    Collection,
    CreateDatabaseResult,
    Database,
    DatabaseClient,
    ListDatabaseResult,
)

__all__ = [
    "Capability",
    "Collection",
    "CreateDatabaseResult",
    "Database",
    "DatabaseClient",
    "DatabaseInfo",
    "DatabaseKind",
    "DropDatabaseResult",
    "ListDatabaseResult",
    "RebuildIndexResult",
]
