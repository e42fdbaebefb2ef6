"""Request composition for document operations.

Every function here is pure: it turns an option bundle into an immutable
DocumentRequest and never performs I/O. Unset optional parameters are
left out of the payload so the service applies its own defaults.
"""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vectordb_sdk.config import ClientOptions, ReadConsistency
from vectordb_sdk.documents.fields import encode_fields
from vectordb_sdk.documents.filter import Filter, render_filter
from vectordb_sdk.documents.models import (
    DeleteDocumentOption,
    Document,
    QueryDocumentOption,
    SearchDocumentOption,
    SearchParams,
    UpdateDocumentOption,
    UpsertDocumentOption,
)
from vectordb_sdk.exceptions import SearchAnchorError, ValidationError

UPSERT_PATH = "/document/upsert"
QUERY_PATH = "/document/query"
SEARCH_PATH = "/document/search"
UPDATE_PATH = "/document/update"
DELETE_PATH = "/document/delete"

# Keys a document carries next to its flattened fields
RESERVED_KEYS = frozenset({"id", "vector", "score"})


class CollectionRef(BaseModel):
    """Database and collection a request targets."""

    model_config = ConfigDict(frozen=True)

    database: str = Field(min_length=1, description="Database name")
    collection: str = Field(min_length=1, description="Collection name")

    def base_payload(self) -> dict[str, Any]:
        return {"database": self.database, "collection": self.collection}


class SearchAnchor(BaseModel):
    """Similarity basis of a search. At most one member is set."""

    model_config = ConfigDict(frozen=True)

    vectors: list[list[float]] | None = None
    document_ids: list[str] | None = None
    embedding_items: list[str] | None = None

    @model_validator(mode="after")
    def _single_anchor(self) -> "SearchAnchor":
        supplied = [
            name
            for name in ("vectors", "document_ids", "embedding_items")
            if getattr(self, name)
        ]
        if len(supplied) > 1:
            raise SearchAnchorError(
                f"Search accepts one anchor, got: {', '.join(supplied)}",
                details={"anchors": supplied},
            )
        return self


class DocumentRequest(BaseModel):
    """A composed request, ready for the transport.

    Freezing is shallow: the payload dict is built fresh by each composer
    and must not be mutated after composition.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    payload: dict[str, Any]


def _consistency(
    override: ReadConsistency | None,
    options: ClientOptions,
) -> str:
    return (override or options.read_consistency).value


def _selector(
    document_ids: Sequence[str] | None,
    filter_: Filter | None,
) -> dict[str, Any]:
    query: dict[str, Any] = {}
    if document_ids is not None:
        query["documentIds"] = list(document_ids)
    condition = render_filter(filter_)
    if condition:
        query["filter"] = condition
    return query


def _check_field_names(names: Sequence[str], document_id: str | None = None) -> None:
    clashes = sorted(RESERVED_KEYS.intersection(names))
    if clashes:
        raise ValidationError(
            f"Field names clash with reserved document keys: {', '.join(clashes)}",
            details={"fields": clashes, "document_id": document_id},
        )


def encode_document(document: Document) -> dict[str, Any]:
    """Encode a full document; fields are flattened next to id and vector."""
    _check_field_names(list(document.fields), document.id)
    encoded: dict[str, Any] = {"id": document.id}
    if document.vector is not None:
        encoded["vector"] = list(document.vector)
    encoded.update(encode_fields(document.fields))
    return encoded


def compose_upsert(
    target: CollectionRef,
    documents: Sequence[Document],
    option: UpsertDocumentOption | None = None,
) -> DocumentRequest:
    """Compose an upsert. Documents are always sent whole."""
    payload = target.base_payload()
    payload["documents"] = [encode_document(document) for document in documents]
    if option is not None and option.build_index is not None:
        payload["buildIndex"] = option.build_index
    return DocumentRequest(path=UPSERT_PATH, payload=payload)


def compose_query(
    target: CollectionRef,
    document_ids: Sequence[str] | None,
    option: QueryDocumentOption | None,
    options: ClientOptions,
) -> DocumentRequest:
    """Compose a query.

    An empty id list with no filter is forwarded as-is; no default
    filter is substituted.
    """
    option = option or QueryDocumentOption()
    query = _selector(document_ids, option.filter)
    query["retrieveVector"] = option.retrieve_vector
    if option.output_fields is not None:
        query["outputFields"] = list(option.output_fields)
    if option.offset is not None:
        query["offset"] = option.offset
    if option.limit is not None:
        query["limit"] = option.limit

    payload = target.base_payload()
    payload["readConsistency"] = _consistency(option.read_consistency, options)
    payload["query"] = query
    return DocumentRequest(path=QUERY_PATH, payload=payload)


def _encode_params(params: SearchParams) -> dict[str, Any]:
    return params.model_dump(exclude_none=True)


def compose_search(
    target: CollectionRef,
    anchor: SearchAnchor,
    option: SearchDocumentOption | None,
    options: ClientOptions,
) -> DocumentRequest:
    """Compose a search around a single anchor."""
    option = option or SearchDocumentOption()
    search: dict[str, Any] = {}
    if anchor.document_ids is not None:
        search["documentIds"] = list(anchor.document_ids)
    if anchor.vectors is not None:
        search["vectors"] = [list(vector) for vector in anchor.vectors]
    if anchor.embedding_items is not None:
        search["embeddingItems"] = list(anchor.embedding_items)

    condition = render_filter(option.filter)
    if condition:
        search["filter"] = condition
    search["retrieveVector"] = option.retrieve_vector
    if option.output_fields is not None:
        search["outputFields"] = list(option.output_fields)
    if option.limit is not None:
        search["limit"] = option.limit
    if option.params is not None:
        search["params"] = _encode_params(option.params)

    payload = target.base_payload()
    payload["readConsistency"] = _consistency(option.read_consistency, options)
    payload["search"] = search
    return DocumentRequest(path=SEARCH_PATH, payload=payload)


def compose_update(
    target: CollectionRef,
    option: UpdateDocumentOption,
) -> DocumentRequest:
    """Compose an update.

    Only the fields present in the option are patched; nothing else is
    synthesized.
    """
    update: dict[str, Any] = {}
    if option.update_vector is not None:
        update["vector"] = list(option.update_vector)
    if option.update_fields:
        _check_field_names(list(option.update_fields))
        update.update(encode_fields(option.update_fields))

    payload = target.base_payload()
    payload["query"] = _selector(option.query_ids, option.query_filter)
    payload["update"] = update
    return DocumentRequest(path=UPDATE_PATH, payload=payload)


def compose_delete(
    target: CollectionRef,
    option: DeleteDocumentOption | None = None,
) -> DocumentRequest:
    """Compose a delete from its selector."""
    payload = target.base_payload()
    if option is not None:
        payload["query"] = _selector(option.document_ids, option.filter)
    return DocumentRequest(path=DELETE_PATH, payload=payload)
