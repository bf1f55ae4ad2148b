"""Extraction relay: forward a local document to SoMark and normalize the answer."""

from somark_sync.relay.client import API_URL, SomarkClient, extract, pick_field, resolve_formats
from somark_sync.relay.models import (
    DecodeError,
    ErrorKind,
    ExtractionRequest,
    ExtractionResult,
    FileReadError,
    RelayError,
    RelayTimeoutError,
    RemoteError,
    TransportError,
)

__all__ = [
    "API_URL",
    "DecodeError",
    "ErrorKind",
    "ExtractionRequest",
    "ExtractionResult",
    "FileReadError",
    "RelayError",
    "RelayTimeoutError",
    "RemoteError",
    "SomarkClient",
    "TransportError",
    "extract",
    "pick_field",
    "resolve_formats",
]
