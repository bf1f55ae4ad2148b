"""SoMark sync plugin: tool, gateway status method and host registration."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from somark_sync.config import OutputFormat, PluginConfig, config_from_host
from somark_sync.plugin.host import PluginHost, ToolSpec
from somark_sync.relay import ExtractionRequest, SomarkClient

logger = logging.getLogger(__name__)

PLUGIN_NAME = "somark-sync"
TOOL_NAME = "somark_extract"
STATUS_METHOD = "somark_sync.status"


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file_path: str
    format: OutputFormat | None = None


class SomarkSyncPlugin:
    """Binds one immutable config to the relay and exposes it to the host."""

    def __init__(self, config: PluginConfig, client: SomarkClient | None = None) -> None:
        self.config = config
        self._client = client or SomarkClient(config)

    @property
    def tool_spec(self) -> ToolSpec:
        return ToolSpec(
            name=TOOL_NAME,
            description=(
                "Extract text and structure from PDF, PNG, or JPG documents. "
                "Returns markdown and/or JSON output."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path to the document file (PDF, PNG, JPG)",
                    },
                    "format": {
                        "type": "string",
                        "enum": [f.value for f in OutputFormat],
                        "default": self.config.output_format.value,
                        "description": "Output format",
                    },
                },
                "required": ["file_path"],
                "additionalProperties": False,
            },
        )

    async def handle_tool(self, args: dict[str, Any]) -> dict[str, Any]:
        """Run ``somark_extract``. Raises ValidationError on malformed args."""
        parsed = ToolArguments.model_validate(args)
        request = ExtractionRequest(file_path=parsed.file_path, format=parsed.format)
        result = await self._client.extract(request)
        return result.to_payload()

    def status(self) -> dict[str, Any]:
        return {
            "plugin": PLUGIN_NAME,
            "status": "running",
            "config": {
                "has_api_key": self.config.has_api_key,
                "output_format": self.config.output_format.value,
            },
        }

    def register(self, host: PluginHost) -> None:
        host.register_tool(self.tool_spec, self.handle_tool)
        host.register_gateway_method(STATUS_METHOD, self.status)
        if not self.config.has_api_key:
            logger.warning("No SoMark API key configured; requests will be sent without one")
        logger.info("[SoMark Sync Plugin] Loaded!")


def create_plugin(raw_config: dict[str, Any] | None = None) -> SomarkSyncPlugin:
    """Entry point factory: build the plugin from host-supplied config."""
    return SomarkSyncPlugin(config_from_host(raw_config))
