"""somark.yaml discovery, env var expansion and api_key fallback."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import PluginConfig

CONFIG_FILENAME = "somark.yaml"

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_search_path(cli_path: str | None = None) -> list[Path]:
    """Files consulted in order: --config, ./somark.yaml, ~/.somark/config.yaml."""
    paths = [Path(cli_path)] if cli_path else []
    paths.append(Path(CONFIG_FILENAME))
    paths.append(Path.home() / ".somark" / "config.yaml")
    return paths


def load_config(cli_path: str | None = None) -> PluginConfig:
    """Build the config from the first non-empty file on the search path, else defaults."""
    for path in config_search_path(cli_path):
        if not path.exists():
            continue
        raw = _read_mapping(path)
        if raw is None:
            continue
        try:
            return _build(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return _build({})


def config_from_host(raw: dict | None) -> PluginConfig:
    """Build a config from the mapping the host runtime hands to the plugin."""
    try:
        return _build(_expand_env_vars(dict(raw or {})))
    except ValidationError as e:
        raise ValueError(f"Invalid plugin config: {e}") from e


def _read_mapping(path: Path) -> dict | None:
    """Parse one YAML file. Empty files yield None."""
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping")
    return raw


def _build(raw: dict) -> PluginConfig:
    """Fill in api_key from the environment when the file leaves it blank."""
    if not raw.get("api_key"):
        env_name = raw.get("api_key_env") or PluginConfig.model_fields["api_key_env"].default
        env_key = os.environ.get(str(env_name), "")
        if env_key:
            raw = {**raw, "api_key": env_key}
    return PluginConfig(**raw)


def _expand_env_vars(raw: dict) -> dict:
    """Substitute ${VAR} in the string values of the flat config mapping.

    Non-string values (timeout, nulls) pass through untouched; unset vars become "".
    """
    return {
        key: _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), value)
        if isinstance(value, str)
        else value
        for key, value in raw.items()
    }


# Default YAML template for `somark config init`
DEFAULT_CONFIG_TEMPLATE = """\
# somark.yaml

# SoMark API credentials
api_key: ""                    # leave blank to read from api_key_env
api_key_env: "SOMARK_API_KEY"

# Extraction
output_format: "both"          # markdown | json | both
timeout: 120                   # seconds

# Logging
log_level: "info"              # debug | info | warn | error
"""
