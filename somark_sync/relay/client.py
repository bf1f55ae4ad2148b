"""SoMark extraction relay: upload a local document, return its markdown/JSON."""

from __future__ import annotations

import asyncio
import json
import logging
import mimetypes
from pathlib import Path
from typing import Any

import httpx

from somark_sync.config.models import OutputFormat, PluginConfig
from somark_sync.relay.models import (
    DecodeError,
    ExtractionRequest,
    ExtractionResult,
    FileReadError,
    RelayError,
    RelayTimeoutError,
    RemoteError,
    TransportError,
)

logger = logging.getLogger(__name__)

API_URL = "https://somark.soulcode.cn/api/v1/extract/acc_sync"


def resolve_formats(fmt: OutputFormat) -> list[str]:
    """Expand ``both`` into the two concrete formats the service understands."""
    if fmt == OutputFormat.both:
        return ["markdown", "json"]
    return [fmt.value]


def pick_field(body: dict[str, Any], key: str) -> str:
    """Return ``body[key]``, else ``body["data"][key]``, else ``""``.

    The service has been seen answering both flat and nested under ``data``,
    so both shapes are accepted. Empty values fall through to the next lookup.
    """
    value = body.get(key)
    if not value:
        data = body.get("data")
        value = data.get(key) if isinstance(data, dict) else None
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class SomarkClient:
    """Relays one document per call to the SoMark sync extraction endpoint."""

    def __init__(self, config: PluginConfig, api_url: str = API_URL) -> None:
        self.config = config
        self._api_url = api_url

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """Run one extraction. Never raises; failures come back as results."""
        file_name = Path(request.file_path).name
        formats = resolve_formats(request.format or self.config.output_format)

        try:
            fields = await self._send(request.file_path, file_name, formats)
        except RelayError as e:
            logger.warning("Extraction of %s failed (%s): %s", file_name, e.kind.value, e)
            return ExtractionResult.failure(file_name, e)
        except Exception as e:
            logger.exception("Unexpected error extracting %s", file_name)
            return ExtractionResult.failure(file_name, e)

        logger.info("Extracted %s (%s)", file_name, ", ".join(formats))
        return ExtractionResult(success=True, file=file_name, **fields)

    async def _send(self, file_path: str, file_name: str, formats: list[str]) -> dict[str, str]:
        content = await self._read_file(file_path)
        content_type = mimetypes.guess_type(file_name)[0] or "application/octet-stream"

        files = {"file": (file_name, content, content_type)}
        data = {
            "output_formats": json.dumps(formats),
            "api_key": self.config.api_key.get_secret_value(),
        }
        timeout = float(self.config.timeout_seconds)

        logger.debug("POST %s file=%s size=%d formats=%s", self._api_url, file_name, len(content), formats)
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
                resp = await asyncio.wait_for(
                    client.post(self._api_url, files=files, data=data),
                    timeout=timeout,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise RelayTimeoutError(f"Request timed out after {self.config.timeout_seconds}s") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}") from e

        if not resp.is_success:
            raise RemoteError(resp.status_code, resp.text)

        try:
            body = resp.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON in response: {e}") from e
        if not isinstance(body, dict):
            raise DecodeError(f"Expected a JSON object in response, got {type(body).__name__}")

        out = {}
        for fmt in formats:
            key = "json_output" if fmt == "json" else fmt
            out[key] = pick_field(body, fmt)
        return out

    @staticmethod
    async def _read_file(file_path: str) -> bytes:
        try:
            return await asyncio.to_thread(Path(file_path).read_bytes)
        except OSError as e:
            reason = e.strerror or type(e).__name__
            raise FileReadError(f"Cannot read file {Path(file_path).name}: {reason}") from e


async def extract(request: ExtractionRequest, config: PluginConfig) -> ExtractionResult:
    """Module-level entry point: one request, one config, one result."""
    return await SomarkClient(config).extract(request)
