"""Client entry point."""

from types import TracebackType

from vectordb_sdk.config import ClientOptions, VectorDBSettings, get_settings
from vectordb_sdk.databases.service import DatabaseClient
from vectordb_sdk.transport.client import HTTPTransport, Transport


class VectorDBClient(DatabaseClient):
    """Vector database client.

    Usage:
        async with VectorDBClient() as client:
            docs = client.database("db").collection("books").documents
            result = await docs.query(["0001"])
    """

    def __init__(
        self,
        settings: VectorDBSettings | None = None,
        transport: Transport | None = None,
        options: ClientOptions | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Connection configuration. Loaded from environment
                if not provided.
            transport: Request transport (for testing).
            options: Client-wide defaults. Derived from settings if not
                provided.
        """
        self._settings = settings or get_settings().vectordb
        super().__init__(
            transport or HTTPTransport(settings=self._settings),
            options or ClientOptions.from_settings(self._settings),
        )

    @property
    def options(self) -> ClientOptions:
        return self._options

    async def close(self) -> None:
        """Close the transport."""
        await self._transport.close()

    async def __aenter__(self) -> "VectorDBClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
