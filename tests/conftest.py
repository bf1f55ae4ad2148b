"""Shared test fixtures for somark_sync."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from pydantic import SecretStr

from somark_sync.config.models import PluginConfig


@pytest.fixture
def sample_config():
    return PluginConfig(api_key=SecretStr("sk-test-123"))


@pytest.fixture
def sample_pdf(tmp_path):
    path = tmp_path / "docs" / "invoice.pdf"
    path.parent.mkdir()
    path.write_bytes(b"%PDF-1.4\n%fake pdf body\n")
    return path


@pytest.fixture
def mock_http():
    """Patch httpx.AsyncClient in the relay; tests set ``mock_http.post`` behaviour."""
    client = AsyncMock()
    client.post.return_value = httpx.Response(
        200, json={"markdown": "# Invoice", "json": '{"total": 42}'}
    )
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)

    with patch("somark_sync.relay.client.httpx.AsyncClient", return_value=client) as client_cls:
        client.client_cls = client_cls
        yield client


@pytest.fixture
def isolated_config_dirs(tmp_path, monkeypatch):
    """Run with no project-local or user-global somark config and no API key env."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
    monkeypatch.delenv("SOMARK_API_KEY", raising=False)
    return tmp_path
