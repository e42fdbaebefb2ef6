"""Transport module."""

from vectordb_sdk.transport.client import HTTPTransport, Transport, check_reply

__all__ = [
    "HTTPTransport",
    "Transport",
    "check_reply",
]
