"""Database kinds, capabilities and result models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DatabaseKind(str, Enum):
    """Kind of database, as reported in ``dbType``."""

    BASE = "BASE"
    AI_DOC = "AI_DOC"


class Capability(str, Enum):
    """Operations a database handle can offer."""

    DOCUMENTS = "documents"
    REBUILD_INDEX = "rebuild_index"


# Selected once when a handle is built
CAPABILITIES: dict[DatabaseKind, frozenset[Capability]] = {
    DatabaseKind.BASE: frozenset({Capability.DOCUMENTS, Capability.REBUILD_INDEX}),
    DatabaseKind.AI_DOC: frozenset(),
}


class DatabaseInfo(BaseModel):
    """Listing metadata of a database."""

    model_config = ConfigDict(frozen=True)

    kind: DatabaseKind = Field(default=DatabaseKind.BASE, description="Database kind")
    create_time: str | None = Field(default=None, description="Creation time")


class DropDatabaseResult(BaseModel):
    """Result of a drop; 0 when the database was already absent."""

    model_config = ConfigDict(frozen=True)

    affected_count: int = Field(default=0, description="Databases removed")


class RebuildIndexResult(BaseModel):
    """Result of an index rebuild."""

    model_config = ConfigDict(frozen=True)

    task_ids: list[str] = Field(default_factory=list, description="Server task ids")
