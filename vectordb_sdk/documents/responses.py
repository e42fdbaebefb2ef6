"""Decoding of document operation replies."""

from collections.abc import Mapping
from typing import Any

from vectordb_sdk.documents.fields import decode_fields
from vectordb_sdk.documents.models import Document, QueryDocumentResult, SearchDocumentResult
from vectordb_sdk.exceptions import ErrorCode, TransportError

_DOCUMENT_KEYS = ("id", "vector", "score")


def decode_document(raw: Mapping[str, Any], with_score: bool = False) -> Document:
    """Rebuild a document from one returned record.

    Vector, score and fields may each be missing. Everything other than
    id, vector and score is a field; non-scalar values land in extras.
    A score on a record decoded without with_score is kept in extras.

    Args:
        raw: Record as returned by the service.
        with_score: Copy the score (search replies only).

    Raises:
        TransportError: If the record has no id.
    """
    if not isinstance(raw, Mapping) or "id" not in raw:
        raise TransportError(
            "Invalid document in response: missing id",
            code=ErrorCode.INVALID_RESPONSE,
        )

    fields, extras = decode_fields(
        {name: value for name, value in raw.items() if name not in _DOCUMENT_KEYS}
    )
    score = None
    if with_score:
        score = raw.get("score")
    elif "score" in raw:
        extras["score"] = raw["score"]
    return Document(
        id=str(raw["id"]),
        vector=raw.get("vector"),
        fields=fields,
        score=score,
        extras=extras,
    )


def decode_query_response(body: Mapping[str, Any]) -> QueryDocumentResult:
    """Decode a query reply."""
    documents = [decode_document(raw) for raw in body.get("documents") or []]
    return QueryDocumentResult(
        documents=documents,
        affected_count=len(documents),
        total=int(body.get("count") or 0),
    )


def decode_search_response(body: Mapping[str, Any]) -> SearchDocumentResult:
    """Decode a search reply into one list of hits per anchor."""
    groups = [
        [decode_document(raw, with_score=True) for raw in group or []]
        for group in body.get("documents") or []
    ]
    return SearchDocumentResult(documents=groups)


def decode_affected_count(body: Mapping[str, Any]) -> int:
    """Read the affected count of a mutation reply; absent means 0."""
    return int(body.get("affectedCount") or 0)
