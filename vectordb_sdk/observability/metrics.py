"""Prometheus metrics for the vector database client.

Provides metrics instrumentation for:
- Request latency and counts per endpoint path
- Documents returned by query and search
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)

REQUEST_DURATION = Histogram(
    "vectordb_request_duration_seconds",
    "Vector database request duration in seconds",
    ["path", "status"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

REQUEST_TOTAL = Counter(
    "vectordb_requests_total",
    "Total vector database requests",
    ["path", "status"],
)

DOCUMENTS_RETURNED = Histogram(
    "vectordb_documents_returned",
    "Documents returned per read operation",
    ["operation"],
    buckets=[0, 1, 5, 10, 20, 50, 100, 500, 1000],
)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get the content type for metrics output."""
    return CONTENT_TYPE_LATEST


def track_request(
    path: str,
    duration: float,
    success: bool = True,
) -> None:
    """Track a single transport request.

    Args:
        path: Endpoint path, e.g. ``/document/search``.
        duration: Request duration in seconds.
        success: Whether the request succeeded.
    """
    status = "success" if success else "error"

    REQUEST_DURATION.labels(path=path, status=status).observe(duration)
    REQUEST_TOTAL.labels(path=path, status=status).inc()


def track_documents_returned(operation: str, count: int) -> None:
    """Track how many documents a read operation returned.

    Args:
        operation: ``query`` or ``search``.
        count: Number of documents decoded from the reply.
    """
    DOCUMENTS_RETURNED.labels(operation=operation).observe(count)
