"""Tests for the HTTP transport."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from pydantic import SecretStr

from vectordb_sdk.config import VectorDBSettings
from vectordb_sdk.exceptions import ErrorCode, ServerError, TransportError
from vectordb_sdk.transport.client import HTTPTransport, check_reply


def _response(body: object) -> MagicMock:
    response = MagicMock()
    response.json.return_value = body
    response.raise_for_status = MagicMock()
    return response


def _settings() -> VectorDBSettings:
    return VectorDBSettings(
        url="http://vdb:8100/",
        username="root",
        api_key=SecretStr("key-123"),
    )


class TestCheckReply:
    """Tests for reply code classification."""

    def test_zero_code_passes(self) -> None:
        """A zero code is success."""
        check_reply("/document/query", {"code": 0, "msg": "Operation success"})

    def test_missing_code_passes(self) -> None:
        """A reply without a code is treated as success."""
        check_reply("/document/query", {"documents": []})

    def test_non_zero_code_raises(self) -> None:
        """A non-zero code raises ServerError."""
        with pytest.raises(ServerError) as exc_info:
            check_reply("/document/upsert", {"code": 15000, "msg": "invalid vector"})

        assert exc_info.value.server_code == 15000
        assert exc_info.value.code == ErrorCode.SERVER_ERROR

    @pytest.mark.parametrize(
        "message",
        [
            "database db-test not exist",
            "can not find database: db-test",
            "Database Not Exist",
        ],
    )
    def test_not_found_is_structured(self, message: str) -> None:
        """Missing-resource replies surface as NOT_FOUND."""
        with pytest.raises(ServerError) as exc_info:
            check_reply("/database/drop", {"code": 15302, "msg": message})

        assert exc_info.value.code == ErrorCode.NOT_FOUND


class TestHTTPTransport:
    """Tests for HTTPTransport."""

    @pytest.mark.asyncio
    async def test_request_posts_json(self) -> None:
        """Payload is posted to url + path with auth header."""
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        mock_client.post.return_value = _response({"code": 0, "affectedCount": 1})

        transport = HTTPTransport(settings=_settings(), client=mock_client)
        body = await transport.request("/document/upsert", {"database": "db"})

        assert body == {"code": 0, "affectedCount": 1}
        call = mock_client.post.call_args
        assert call.args[0] == "http://vdb:8100/document/upsert"
        assert call.kwargs["json"] == {"database": "db"}
        assert call.kwargs["headers"]["Authorization"] == "Bearer account=root&api_key=key-123"

    @pytest.mark.asyncio
    async def test_server_error_code(self) -> None:
        """Non-zero reply code raises ServerError."""
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        mock_client.post.return_value = _response({"code": 1, "msg": "boom"})

        transport = HTTPTransport(settings=_settings(), client=mock_client)

        with pytest.raises(ServerError):
            await transport.request("/document/query", {})

    @pytest.mark.asyncio
    async def test_http_404_is_transport_error(self) -> None:
        """HTTP 404 is a transport failure, not a missing resource."""
        mock_response = MagicMock()
        mock_response.status_code = 404
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Not found",
            request=MagicMock(),
            response=mock_response,
        )
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        mock_client.post.return_value = mock_response

        transport = HTTPTransport(settings=_settings(), client=mock_client)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("/database/drop", {"database": "db"})

        assert exc_info.value.code == ErrorCode.TRANSPORT_ERROR
        assert exc_info.value.details["status_code"] == 404

    @pytest.mark.asyncio
    async def test_http_500(self) -> None:
        """Other HTTP errors map to TRANSPORT_ERROR."""
        mock_response = MagicMock()
        mock_response.status_code = 500
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Server error",
            request=MagicMock(),
            response=mock_response,
        )
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        mock_client.post.return_value = mock_response

        transport = HTTPTransport(settings=_settings(), client=mock_client)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("/document/query", {})

        assert exc_info.value.code == ErrorCode.TRANSPORT_ERROR
        assert exc_info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Timeouts map to TIMEOUT."""
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        mock_client.post.side_effect = httpx.ReadTimeout("timed out")

        transport = HTTPTransport(settings=_settings(), client=mock_client)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("/document/search", {})

        assert exc_info.value.code == ErrorCode.TIMEOUT

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        """Connection errors raise TransportError."""
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        mock_client.post.side_effect = httpx.ConnectError("Connection refused")

        transport = HTTPTransport(settings=_settings(), client=mock_client)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("/document/search", {})

        assert exc_info.value.code == ErrorCode.TRANSPORT_ERROR

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        """Undecodable body raises INVALID_RESPONSE."""
        response = MagicMock()
        response.raise_for_status = MagicMock()
        response.json.side_effect = ValueError("not json")
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        mock_client.post.return_value = response

        transport = HTTPTransport(settings=_settings(), client=mock_client)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("/document/query", {})

        assert exc_info.value.code == ErrorCode.INVALID_RESPONSE

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        """Transport closes owned client."""
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        transport = HTTPTransport(settings=_settings(), client=mock_client)
        transport._owns_client = True

        await transport.close()

        mock_client.aclose.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client(self) -> None:
        """Injected clients are not closed."""
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        transport = HTTPTransport(settings=_settings(), client=mock_client)

        await transport.close()

        mock_client.aclose.assert_not_called()
