from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class OutputFormat(str, Enum):
    """Which structured result(s) the extraction service should return."""

    markdown = "markdown"
    json = "json"
    both = "both"


class PluginConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: SecretStr = SecretStr("")
    api_key_env: str = "SOMARK_API_KEY"
    output_format: OutputFormat = OutputFormat.both
    timeout: int = Field(default=120, gt=0)
    log_level: Literal["debug", "info", "warn", "error"] = "info"

    @property
    def timeout_seconds(self) -> int:
        return self.timeout

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.get_secret_value())
