"""Database and collection handles."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from vectordb_sdk.config import ClientOptions
from vectordb_sdk.databases.models import (
    CAPABILITIES,
    Capability,
    DatabaseInfo,
    DatabaseKind,
    DropDatabaseResult,
    RebuildIndexResult,
)
from vectordb_sdk.documents.requests import CollectionRef
from vectordb_sdk.documents.responses import decode_affected_count
from vectordb_sdk.documents.service import DocumentClient
from vectordb_sdk.exceptions import DatabaseKindError, ErrorCode, VectorDBError
from vectordb_sdk.logging_config import get_logger
from vectordb_sdk.transport.client import Transport

logger = get_logger(__name__)

CREATE_DATABASE_PATH = "/database/create"
DROP_DATABASE_PATH = "/database/drop"
LIST_DATABASE_PATH = "/database/list"
CREATE_AI_DATABASE_PATH = "/ai/database/create"
DROP_AI_DATABASE_PATH = "/ai/database/drop"
REBUILD_INDEX_PATH = "/index/rebuild"


class Database:
    """Handle to a database. Building one sends no request.

    The kind is fixed at construction and determines which operations
    the handle offers.
    """

    def __init__(
        self,
        transport: Transport,
        name: str,
        kind: DatabaseKind = DatabaseKind.BASE,
        options: ClientOptions | None = None,
        info: DatabaseInfo | None = None,
    ) -> None:
        self._transport = transport
        self.name = name
        self.kind = kind
        self.info = info or DatabaseInfo(kind=kind)
        self._options = options or ClientOptions()

    @property
    def capabilities(self) -> frozenset[Capability]:
        return CAPABILITIES[self.kind]

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def require(self, capability: Capability) -> None:
        """Raise DatabaseKindError unless the capability is offered."""
        if not self.supports(capability):
            raise DatabaseKindError(
                f"{capability.value} is not available on {self.kind.value} database {self.name!r}",
                details={"database": self.name, "kind": self.kind.value},
            )

    def collection(self, name: str) -> "Collection":
        """Get a collection handle. Sends no request."""
        return Collection(self, name)

    def __repr__(self) -> str:
        return f"Database(name={self.name!r}, kind={self.kind.value})"


class Collection:
    """Handle to a collection inside a database."""

    def __init__(self, database: Database, name: str) -> None:
        self.database = database
        self.name = name
        self.ref = CollectionRef(database=database.name, collection=name)

    @property
    def documents(self) -> DocumentClient:
        """Document operations on this collection."""
        self.database.require(Capability.DOCUMENTS)
        return DocumentClient(self.database._transport, self.ref, self.database._options)

    async def rebuild_index(
        self,
        drop_before_rebuild: bool = False,
        throttle: int | None = None,
    ) -> RebuildIndexResult:
        """Rebuild the collection's vector index.

        Args:
            drop_before_rebuild: Drop the old index first.
            throttle: CPU cores the rebuild may use.

        Raises:
            DatabaseKindError: On databases without index rebuild.
        """
        self.database.require(Capability.REBUILD_INDEX)

        payload: dict[str, Any] = self.ref.base_payload()
        payload["dropBeforeRebuild"] = drop_before_rebuild
        if throttle is not None:
            payload["throttle"] = throttle

        body = await self.database._transport.request(REBUILD_INDEX_PATH, payload)
        result = RebuildIndexResult(task_ids=[str(task) for task in body.get("taskIds") or []])
        logger.info(
            f"Rebuilding index of {self.name}",
            extra={"database": self.database.name, "task_ids": result.task_ids},
        )
        return result

    def __repr__(self) -> str:
        return f"Collection(database={self.database.name!r}, name={self.name!r})"


class CreateDatabaseResult(BaseModel):
    """Result of a create, with a handle to the new database."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    affected_count: int = Field(default=0, description="Databases created")
    database: Database


class ListDatabaseResult(BaseModel):
    """Databases split by kind."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    databases: list[Database] = Field(default_factory=list)
    ai_databases: list[Database] = Field(default_factory=list)


class DatabaseClient:
    """Create, drop and list databases."""

    def __init__(
        self,
        transport: Transport,
        options: ClientOptions | None = None,
    ) -> None:
        self._transport = transport
        self._options = options or ClientOptions()

    def database(self, name: str) -> Database:
        """Get a handle to a base database. Sends no request."""
        return Database(self._transport, name, DatabaseKind.BASE, self._options)

    def ai_database(self, name: str) -> Database:
        """Get a handle to an AI document database. Sends no request."""
        return Database(self._transport, name, DatabaseKind.AI_DOC, self._options)

    async def create_database(self, name: str) -> CreateDatabaseResult:
        """Create a database. Fails if the name exists."""
        body = await self._transport.request(CREATE_DATABASE_PATH, {"database": name})
        logger.info(f"Created database: {name}")
        return CreateDatabaseResult(
            affected_count=decode_affected_count(body),
            database=self.database(name),
        )

    async def create_ai_database(self, name: str) -> CreateDatabaseResult:
        """Create an AI document database. Fails if the name exists."""
        body = await self._transport.request(CREATE_AI_DATABASE_PATH, {"database": name})
        logger.info(f"Created AI database: {name}")
        return CreateDatabaseResult(
            affected_count=decode_affected_count(body),
            database=self.ai_database(name),
        )

    async def drop_database(self, name: str) -> DropDatabaseResult:
        """Drop a database. Dropping an absent database is a no-op."""
        return await self._drop(DROP_DATABASE_PATH, name)

    async def drop_ai_database(self, name: str) -> DropDatabaseResult:
        """Drop an AI document database. Dropping an absent one is a no-op."""
        return await self._drop(DROP_AI_DATABASE_PATH, name)

    async def _drop(self, path: str, name: str) -> DropDatabaseResult:
        try:
            body = await self._transport.request(path, {"database": name})
        except VectorDBError as e:
            if e.code != ErrorCode.NOT_FOUND:
                raise
            logger.info(f"Database already absent: {name}", extra={"path": path})
            return DropDatabaseResult(affected_count=0)

        logger.info(f"Dropped database: {name}")
        return DropDatabaseResult(affected_count=decode_affected_count(body))

    async def list_databases(self) -> ListDatabaseResult:
        """List databases, split into base and AI document databases."""
        body = await self._transport.request(LIST_DATABASE_PATH, {})
        info = body.get("info") or {}

        databases: list[Database] = []
        ai_databases: list[Database] = []
        for name in body.get("databases") or []:
            item = info.get(name) or {}
            kind = (
                DatabaseKind.AI_DOC
                if item.get("dbType") == DatabaseKind.AI_DOC.value
                else DatabaseKind.BASE
            )
            database = Database(
                self._transport,
                name,
                kind,
                self._options,
                DatabaseInfo(kind=kind, create_time=item.get("createTime")),
            )
            if kind == DatabaseKind.AI_DOC:
                ai_databases.append(database)
            else:
                databases.append(database)

        return ListDatabaseResult(databases=databases, ai_databases=ai_databases)
