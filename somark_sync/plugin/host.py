"""Host runtime interface the plugin registers itself against."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

ToolHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]
GatewayHandler = Callable[[], dict[str, Any]]


class ToolSpec(BaseModel):
    """Tool definition as advertised to the host (JSON-schema parameters)."""

    name: str
    description: str
    parameters: dict[str, Any]


@runtime_checkable
class PluginHost(Protocol):
    """Registration surface offered by the plugin host."""

    def register_tool(self, spec: ToolSpec, handler: ToolHandler) -> None: ...

    def register_gateway_method(self, name: str, handler: GatewayHandler) -> None: ...
