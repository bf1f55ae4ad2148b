"""Host-facing plugin adapter."""

from somark_sync.plugin.host import PluginHost, ToolSpec
from somark_sync.plugin.plugin import (
    PLUGIN_NAME,
    STATUS_METHOD,
    TOOL_NAME,
    SomarkSyncPlugin,
    ToolArguments,
    create_plugin,
)

__all__ = [
    "PLUGIN_NAME",
    "PluginHost",
    "STATUS_METHOD",
    "SomarkSyncPlugin",
    "TOOL_NAME",
    "ToolArguments",
    "ToolSpec",
    "create_plugin",
]
