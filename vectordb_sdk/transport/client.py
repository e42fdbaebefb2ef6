"""Transport interface and HTTP implementation."""

import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from vectordb_sdk.config import VectorDBSettings, get_settings
from vectordb_sdk.exceptions import ErrorCode, ServerError, TransportError
from vectordb_sdk.logging_config import get_logger
from vectordb_sdk.observability.metrics import track_request

logger = get_logger(__name__)

# Server wording for a missing database/collection. Classified here once
# so callers can branch on ErrorCode.NOT_FOUND.
NOT_FOUND_MARKERS = ("not exist", "can not find")


def is_not_found_message(message: str) -> bool:
    """Return True if a server message reports a missing resource."""
    lowered = message.lower()
    return any(marker in lowered for marker in NOT_FOUND_MARKERS)


class Transport(ABC):
    """Abstract base class for request transports.

    Executes one composed request and returns the decoded reply body.
    """

    @abstractmethod
    async def request(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a request and return the reply body.

        Args:
            path: Endpoint path, e.g. ``/document/query``.
            payload: JSON request body.

        Returns:
            Decoded JSON reply.

        Raises:
            TransportError: If the request cannot be completed.
            ServerError: If the service reports a failure.
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        return None


class HTTPTransport(Transport):
    """Transport posting JSON to the vector database HTTP API."""

    def __init__(
        self,
        settings: VectorDBSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP transport.

        Args:
            settings: Connection configuration.
            client: HTTP client (for testing).
        """
        self._settings = settings or get_settings().vectordb
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        api_key = ""
        if self._settings.api_key:
            api_key = self._settings.api_key.get_secret_value()
        return {
            "Authorization": f"Bearer account={self._settings.username}&api_key={api_key}",
            "Content-Type": "application/json",
        }

    async def request(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON payload and return the reply body."""
        client = await self._get_client()
        url = f"{self._settings.url.rstrip('/')}{path}"
        start_time = time.perf_counter()

        try:
            body = await self._send(client, url, path, payload)
        except Exception:
            track_request(path, time.perf_counter() - start_time, success=False)
            raise

        track_request(path, time.perf_counter() - start_time)
        return body

    async def _send(
        self,
        client: httpx.AsyncClient,
        url: str,
        path: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        try:
            response = await client.post(url, json=payload, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(
                f"Vector database request failed: {status}",
                extra={"path": path, "status": status},
            )
            raise TransportError(
                f"Vector database returned {status}",
                details={"path": path, "status_code": status},
            ) from e
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Vector database request timed out: {e}",
                code=ErrorCode.TIMEOUT,
                details={"path": path},
            ) from e
        except httpx.RequestError as e:
            logger.error(
                f"Vector database request error: {e}",
                extra={"path": path},
            )
            raise TransportError(
                f"Failed to connect to vector database: {e}",
                details={"path": path},
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid response from vector database: {e}",
                code=ErrorCode.INVALID_RESPONSE,
                details={"path": path},
            ) from e

        if not isinstance(body, dict):
            raise TransportError(
                "Invalid response from vector database: expected an object",
                code=ErrorCode.INVALID_RESPONSE,
                details={"path": path},
            )

        check_reply(path, body)
        return body


def check_reply(path: str, body: dict[str, Any]) -> None:
    """Raise ServerError if a reply body carries a non-zero result code.

    Args:
        path: Endpoint path the reply belongs to.
        body: Decoded reply body.

    Raises:
        ServerError: With code NOT_FOUND when the message reports a
            missing resource, SERVER_ERROR otherwise.
    """
    server_code = body.get("code", 0)
    if not server_code:
        return

    message = str(body.get("msg", ""))
    code = ErrorCode.NOT_FOUND if is_not_found_message(message) else ErrorCode.SERVER_ERROR
    raise ServerError(
        f"code: {server_code}, message: {message}",
        server_code=server_code,
        code=code,
        details={"path": path},
    )
