"""Document operations against one collection."""

from collections.abc import Mapping, Sequence

from vectordb_sdk.config import ClientOptions
from vectordb_sdk.documents.models import (
    DeleteDocumentOption,
    DeleteDocumentResult,
    Document,
    QueryDocumentOption,
    QueryDocumentResult,
    SearchDocumentOption,
    SearchDocumentResult,
    UpdateDocumentOption,
    UpdateDocumentResult,
    UpsertDocumentOption,
    UpsertDocumentResult,
)
from vectordb_sdk.documents.requests import (
    CollectionRef,
    SearchAnchor,
    compose_delete,
    compose_query,
    compose_search,
    compose_update,
    compose_upsert,
)
from vectordb_sdk.documents.responses import (
    decode_affected_count,
    decode_query_response,
    decode_search_response,
)
from vectordb_sdk.exceptions import SearchAnchorError
from vectordb_sdk.logging_config import get_logger
from vectordb_sdk.observability.metrics import track_documents_returned
from vectordb_sdk.transport.client import Transport

logger = get_logger(__name__)


def _supplied(value: Sequence | Mapping | None) -> bool:
    return value is not None and len(value) > 0


def embedding_items(text: Mapping[str, Sequence[str]]) -> list[str]:
    """Flatten named text queries into the request's embedding items.

    Field names are dropped. With several names the values of the last
    one in iteration order win; select_anchor() rejects that case.
    """
    items: list[str] = []
    for values in text.values():
        items = list(values)
    return items


def select_anchor(
    vectors: Sequence[Sequence[float]] | None = None,
    document_ids: Sequence[str] | None = None,
    text: Mapping[str, Sequence[str]] | None = None,
) -> SearchAnchor:
    """Pick the single similarity anchor of a search.

    Supplying none yields an empty anchor, i.e. a filtered listing.

    Raises:
        SearchAnchorError: If more than one anchor kind is supplied, or
            text queries name more than one embedding field.
    """
    supplied = [
        name
        for name, value in (
            ("vectors", vectors),
            ("document_ids", document_ids),
            ("text", text),
        )
        if _supplied(value)
    ]
    if len(supplied) > 1:
        raise SearchAnchorError(
            f"Search accepts one anchor, got: {', '.join(supplied)}",
            details={"anchors": supplied},
        )

    if _supplied(vectors):
        return SearchAnchor(vectors=[list(vector) for vector in vectors])
    if _supplied(document_ids):
        return SearchAnchor(document_ids=list(document_ids))
    if _supplied(text):
        if len(text) > 1:
            raise SearchAnchorError(
                "Text search targets one embedding field, got: "
                f"{', '.join(sorted(text))}",
                details={"fields": sorted(text)},
            )
        return SearchAnchor(embedding_items=embedding_items(text))
    return SearchAnchor()


class DocumentClient:
    """Upsert, query, search, update and delete documents in a collection.

    Composition and decoding are local; the transport call is the only
    suspension point. No retries and no caching.
    """

    def __init__(
        self,
        transport: Transport,
        target: CollectionRef,
        options: ClientOptions | None = None,
    ) -> None:
        """Initialize the document client.

        Args:
            transport: Executes composed requests.
            target: Database and collection to operate on.
            options: Client-wide defaults such as read consistency.
        """
        self._transport = transport
        self._target = target
        self._options = options or ClientOptions()

    @property
    def target(self) -> CollectionRef:
        return self._target

    def _log_extra(self, **extra: object) -> dict[str, object]:
        return {
            "database": self._target.database,
            "collection": self._target.collection,
            **extra,
        }

    async def upsert(
        self,
        documents: Sequence[Document],
        option: UpsertDocumentOption | None = None,
    ) -> UpsertDocumentResult:
        """Insert or replace documents by id.

        Args:
            documents: Full documents to write.
            option: Upsert options.

        Returns:
            UpsertDocumentResult with the affected count.
        """
        request = compose_upsert(self._target, documents, option)
        body = await self._transport.request(request.path, request.payload)
        result = UpsertDocumentResult(affected_count=decode_affected_count(body))
        logger.debug(
            f"Upserted {result.affected_count} documents",
            extra=self._log_extra(sent=len(documents)),
        )
        return result

    async def query(
        self,
        document_ids: Sequence[str] | None = None,
        option: QueryDocumentOption | None = None,
    ) -> QueryDocumentResult:
        """Fetch documents by id and/or filter.

        Args:
            document_ids: Ids to fetch.
            option: Filter, projection, pagination and consistency.

        Returns:
            QueryDocumentResult with documents and total count.
        """
        request = compose_query(self._target, document_ids, option, self._options)
        body = await self._transport.request(request.path, request.payload)
        result = decode_query_response(body)
        track_documents_returned("query", result.affected_count)
        logger.debug(
            f"Queried {result.affected_count} documents",
            extra=self._log_extra(total=result.total),
        )
        return result

    async def search(
        self,
        vectors: Sequence[Sequence[float]],
        option: SearchDocumentOption | None = None,
    ) -> SearchDocumentResult:
        """Search the nearest documents of each vector."""
        return await self._search(vectors=vectors, option=option)

    async def search_by_id(
        self,
        document_ids: Sequence[str],
        option: SearchDocumentOption | None = None,
    ) -> SearchDocumentResult:
        """Search the nearest documents of stored documents."""
        return await self._search(document_ids=document_ids, option=option)

    async def search_by_text(
        self,
        text: Mapping[str, Sequence[str]],
        option: SearchDocumentOption | None = None,
    ) -> SearchDocumentResult:
        """Search with texts embedded server-side.

        Args:
            text: Embedding field name mapped to query texts. Exactly one
                field name is accepted.
            option: Search options.
        """
        return await self._search(text=text, option=option)

    async def _search(
        self,
        vectors: Sequence[Sequence[float]] | None = None,
        document_ids: Sequence[str] | None = None,
        text: Mapping[str, Sequence[str]] | None = None,
        option: SearchDocumentOption | None = None,
    ) -> SearchDocumentResult:
        anchor = select_anchor(vectors=vectors, document_ids=document_ids, text=text)
        request = compose_search(self._target, anchor, option, self._options)
        body = await self._transport.request(request.path, request.payload)
        result = decode_search_response(body)
        returned = sum(len(group) for group in result.documents)
        track_documents_returned("search", returned)
        logger.debug(
            f"Search returned {returned} documents",
            extra=self._log_extra(groups=len(result.documents)),
        )
        return result

    async def update(self, option: UpdateDocumentOption) -> UpdateDocumentResult:
        """Patch the selected documents.

        Args:
            option: Selector plus vector and/or field patch.

        Returns:
            UpdateDocumentResult with the affected count.
        """
        request = compose_update(self._target, option)
        body = await self._transport.request(request.path, request.payload)
        result = UpdateDocumentResult(affected_count=decode_affected_count(body))
        logger.debug(
            f"Updated {result.affected_count} documents",
            extra=self._log_extra(),
        )
        return result

    async def delete(
        self,
        option: DeleteDocumentOption | None = None,
    ) -> DeleteDocumentResult:
        """Delete the selected documents."""
        request = compose_delete(self._target, option)
        body = await self._transport.request(request.path, request.payload)
        result = DeleteDocumentResult(affected_count=decode_affected_count(body))
        logger.debug(
            f"Deleted {result.affected_count} documents",
            extra=self._log_extra(),
        )
        return result
