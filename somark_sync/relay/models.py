"""Pydantic models and error types for the extraction relay."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from somark_sync.config.models import OutputFormat


class ErrorKind(str, Enum):
    """Failure category attached to an unsuccessful extraction."""

    file_read = "file_read"
    timeout = "timeout"
    network = "network"
    remote = "remote"
    decode = "decode"
    unexpected = "unexpected"


class RelayError(Exception):
    """Base for failures raised inside the relay before they become a result."""

    kind: ErrorKind = ErrorKind.unexpected


class FileReadError(RelayError):
    kind = ErrorKind.file_read


class RelayTimeoutError(RelayError):
    kind = ErrorKind.timeout


class TransportError(RelayError):
    kind = ErrorKind.network


class RemoteError(RelayError):
    """Non-2xx answer from the extraction service."""

    kind = ErrorKind.remote

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error: {status_code} - {body}")


class DecodeError(RelayError):
    kind = ErrorKind.decode


class ExtractionRequest(BaseModel):
    """One file to extract. ``format=None`` defers to the configured default."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    format: OutputFormat | None = None


class ExtractionResult(BaseModel):
    """Outcome of a single extraction, shared by the tool, CLI and gateway."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    file: str
    markdown: str | None = None
    json_output: str | None = Field(default=None, alias="json")
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def failure(cls, file: str, exc: Exception) -> ExtractionResult:
        kind = exc.kind if isinstance(exc, RelayError) else ErrorKind.unexpected
        return cls(success=False, file=file, error=str(exc) or type(exc).__name__, error_kind=kind)

    def to_payload(self) -> dict[str, Any]:
        """Wire shape: ``json`` key restored, absent fields dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
