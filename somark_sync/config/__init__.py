from .loader import config_from_host, load_config
from .models import OutputFormat, PluginConfig

__all__ = [
    "OutputFormat",
    "PluginConfig",
    "config_from_host",
    "load_config",
]
