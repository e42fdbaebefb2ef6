"""Observability module for metrics."""

from vectordb_sdk.observability.metrics import (
    get_metrics,
    get_metrics_content_type,
    track_documents_returned,
    track_request,
)

__all__ = [
    "get_metrics",
    "get_metrics_content_type",
    "track_documents_returned",
    "track_request",
]
