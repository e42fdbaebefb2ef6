"""Document data models, option bundles and result envelopes."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vectordb_sdk.config import ReadConsistency
from vectordb_sdk.documents.fields import DocumentField
from vectordb_sdk.documents.filter import Condition, Filter
from vectordb_sdk.exceptions import FilterError


def _coerce_fields(value: Any) -> Any:
    if value is None or not isinstance(value, Mapping):
        return value
    return {
        name: field if isinstance(field, DocumentField) else DocumentField(value=field)
        for name, field in value.items()
    }


def _coerce_filter(value: Any) -> Filter | None:
    if value is None or isinstance(value, Filter):
        return value
    if isinstance(value, (Condition, str)):
        return Filter(value)
    if isinstance(value, Mapping):
        return Filter.from_dict(value)
    raise FilterError(f"Cannot build a filter from {type(value).__name__}")


class Document(BaseModel):
    """A document stored in a collection.

    Attributes:
        id: Identifier, unique within the collection.
        vector: Embedding vector, absent unless retrieved or supplied.
        fields: Scalar fields by name.
        score: Similarity score, only set on search results.
        extras: Returned values that are not scalar fields (arrays,
            objects), kept as delivered.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Document identifier")
    vector: list[float] | None = Field(default=None, description="Embedding vector")
    fields: dict[str, DocumentField] = Field(
        default_factory=dict,
        description="Scalar fields",
    )
    score: float | None = Field(default=None, description="Similarity score")
    extras: dict[str, Any] = Field(
        default_factory=dict,
        description="Non-scalar values returned by the service",
    )

    @field_validator("fields", mode="before")
    @classmethod
    def _wrap_fields(cls, value: Any) -> Any:
        return _coerce_fields(value)

    def field_values(self) -> dict[str, str | int | float]:
        """Plain scalar values by field name."""
        return {name: field.value for name, field in self.fields.items()}


class SearchParams(BaseModel):
    """ANN tuning knobs.

    Only the parameter matching the collection's index type takes effect;
    the service ignores the others.

    Attributes:
        nprobe: Lists to probe (IVF indexes).
        ef: Search scope (HNSW indexes).
        radius: Distance threshold for range search.
    """

    model_config = ConfigDict(frozen=True)

    nprobe: int | None = Field(default=None, ge=1, description="IVF probe count")
    ef: int | None = Field(default=None, ge=1, description="HNSW search scope")
    radius: float | None = Field(default=None, description="Distance threshold")


class UpsertDocumentOption(BaseModel):
    """Options for upsert."""

    model_config = ConfigDict(frozen=True)

    build_index: bool | None = Field(
        default=None,
        description="Build the index right after writing",
    )


class QueryDocumentOption(BaseModel):
    """Options for query by id and/or filter."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    filter: Filter | None = Field(default=None, description="Filter condition")
    retrieve_vector: bool = Field(default=False, description="Return vectors")
    output_fields: list[str] | None = Field(default=None, description="Field projection")
    offset: int | None = Field(default=None, ge=0, description="Pagination offset")
    limit: int | None = Field(default=None, ge=1, description="Pagination limit")
    read_consistency: ReadConsistency | None = Field(
        default=None,
        description="Overrides the client default",
    )

    @field_validator("filter", mode="before")
    @classmethod
    def _wrap_filter(cls, value: Any) -> Filter | None:
        return _coerce_filter(value)


class SearchDocumentOption(BaseModel):
    """Options for search."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    filter: Filter | None = Field(default=None, description="Filter condition")
    retrieve_vector: bool = Field(default=False, description="Return vectors")
    output_fields: list[str] | None = Field(default=None, description="Field projection")
    limit: int | None = Field(default=None, ge=1, description="Results per anchor")
    params: SearchParams | None = Field(default=None, description="ANN tuning")
    read_consistency: ReadConsistency | None = Field(
        default=None,
        description="Overrides the client default",
    )

    @field_validator("filter", mode="before")
    @classmethod
    def _wrap_filter(cls, value: Any) -> Filter | None:
        return _coerce_filter(value)


class UpdateDocumentOption(BaseModel):
    """Selector plus per-field patch for update.

    Only fields present in update_fields are modified.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    query_ids: list[str] | None = Field(default=None, description="Target ids")
    query_filter: Filter | None = Field(default=None, description="Target filter")
    update_vector: list[float] | None = Field(default=None, description="New vector")
    update_fields: dict[str, DocumentField] | None = Field(
        default=None,
        description="Fields to overwrite",
    )

    @field_validator("query_filter", mode="before")
    @classmethod
    def _wrap_filter(cls, value: Any) -> Filter | None:
        return _coerce_filter(value)

    @field_validator("update_fields", mode="before")
    @classmethod
    def _wrap_update_fields(cls, value: Any) -> Any:
        return _coerce_fields(value)


class DeleteDocumentOption(BaseModel):
    """Selector for delete."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    document_ids: list[str] | None = Field(default=None, description="Target ids")
    filter: Filter | None = Field(default=None, description="Target filter")

    @field_validator("filter", mode="before")
    @classmethod
    def _wrap_filter(cls, value: Any) -> Filter | None:
        return _coerce_filter(value)


class UpsertDocumentResult(BaseModel):
    """Result of an upsert."""

    model_config = ConfigDict(frozen=True)

    affected_count: int = Field(default=0, description="Documents written")


class QueryDocumentResult(BaseModel):
    """Result of a query."""

    model_config = ConfigDict(frozen=True)

    documents: list[Document] = Field(default_factory=list, description="Returned documents")
    affected_count: int = Field(default=0, description="Documents returned")
    total: int = Field(default=0, description="Documents matching the query")


class SearchDocumentResult(BaseModel):
    """Result of a search, one list of hits per anchor."""

    model_config = ConfigDict(frozen=True)

    documents: list[list[Document]] = Field(
        default_factory=list,
        description="Hits grouped by anchor",
    )


class UpdateDocumentResult(BaseModel):
    """Result of an update."""

    model_config = ConfigDict(frozen=True)

    affected_count: int = Field(default=0, description="Documents modified")


class DeleteDocumentResult(BaseModel):
    """Result of a delete."""

    model_config = ConfigDict(frozen=True)

    affected_count: int = Field(default=0, description="Documents removed")
