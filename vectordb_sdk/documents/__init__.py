"""Document query, search and update module."""

from vectordb_sdk.documents.fields import (
    DocumentField,
    FieldKind,
    FieldType,
    decode_field,
    encode_field,
    field_info,
    infer_type,
)
from vectordb_sdk.documents.filter import (
    And,
    Compare,
    Condition,
    Eq,
    Exclude,
    Filter,
    In,
    Include,
    IncludeAll,
    Ne,
    Not,
    NotIn,
    Or,
    Range,
    Raw,
    render_filter,
)
from vectordb_sdk.documents.models import (
    DeleteDocumentOption,
    DeleteDocumentResult,
    Document,
    QueryDocumentOption,
    QueryDocumentResult,
    SearchDocumentOption,
    SearchDocumentResult,
    SearchParams,
    UpdateDocumentOption,
    UpdateDocumentResult,
    UpsertDocumentOption,
    UpsertDocumentResult,
)
from vectordb_sdk.documents.requests import CollectionRef, DocumentRequest, SearchAnchor
from vectordb_sdk.documents.service import DocumentClient, select_anchor

__all__ = [
    "And",
    "CollectionRef",
    "Compare",
    "Condition",
    "DeleteDocumentOption",
    "DeleteDocumentResult",
    "Document",
    "DocumentClient",
    "DocumentField",
    "DocumentRequest",
    "Eq",
    "Exclude",
    "FieldKind",
    "FieldType",
    "Filter",
    "In",
    "Include",
    "IncludeAll",
    "Ne",
    "Not",
    "NotIn",
    "Or",
    "QueryDocumentOption",
    "QueryDocumentResult",
    "Range",
    "Raw",
    "SearchAnchor",
    "SearchDocumentOption",
    "SearchDocumentResult",
    "SearchParams",
    "UpdateDocumentOption",
    "UpdateDocumentResult",
    "UpsertDocumentOption",
    "UpsertDocumentResult",
    "decode_field",
    "encode_field",
    "field_info",
    "infer_type",
    "render_filter",
    "select_anchor",
]
