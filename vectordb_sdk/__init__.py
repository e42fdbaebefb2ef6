"""Async client for the vector database document API."""

__version__ = "0.1.0"

from vectordb_sdk.client import VectorDBClient
from vectordb_sdk.config import ClientOptions, ReadConsistency, VectorDBSettings
from vectordb_sdk.documents import (
    Document,
    DocumentField,
    Filter,
    QueryDocumentOption,
    SearchDocumentOption,
    SearchParams,
    UpdateDocumentOption,
)
from vectordb_sdk.exceptions import ErrorCode, VectorDBError

__all__ = [
    "ClientOptions",
    "Document",
    "DocumentField",
    "ErrorCode",
    "Filter",
    "QueryDocumentOption",
    "ReadConsistency",
    "SearchDocumentOption",
    "SearchParams",
    "UpdateDocumentOption",
    "VectorDBClient",
    "VectorDBError",
    "VectorDBSettings",
    "__version__",
]
