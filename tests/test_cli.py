"""Tests for the somark CLI (extract, status, config show/init)."""

from __future__ import annotations

import json

import httpx
import pytest
from typer.testing import CliRunner

from somark_sync.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(isolated_config_dirs, monkeypatch):
    monkeypatch.setenv("SOMARK_API_KEY", "sk-cli-secret")
    return isolated_config_dirs


# ---------------------------------------------------------------------------
# somark extract
# ---------------------------------------------------------------------------


class TestExtractCommand:
    def test_prints_result_json(self, mock_http, sample_pdf):
        result = runner.invoke(app, ["extract", str(sample_pdf)])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["file"] == "invoice.pdf"
        assert payload["markdown"] == "# Invoice"
        assert result.stdout.startswith('{\n  "success": true')

    def test_format_option(self, mock_http, sample_pdf):
        result = runner.invoke(app, ["extract", str(sample_pdf), "-f", "markdown"])

        assert result.exit_code == 0
        sent = json.loads(mock_http.post.call_args.kwargs["data"]["output_formats"])
        assert sent == ["markdown"]
        assert "json" not in json.loads(result.stdout)

    def test_long_format_option(self, mock_http, sample_pdf):
        result = runner.invoke(app, ["extract", str(sample_pdf), "--format", "json"])

        assert result.exit_code == 0
        assert "markdown" not in json.loads(result.stdout)

    def test_invalid_format_rejected(self, mock_http, sample_pdf):
        result = runner.invoke(app, ["extract", str(sample_pdf), "-f", "html"])

        assert result.exit_code != 0
        mock_http.post.assert_not_awaited()

    def test_empty_path_reports_failure_json(self, mock_http):
        result = runner.invoke(app, ["extract", ""])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert payload["error_kind"] == "file_read"
        mock_http.post.assert_not_awaited()

    def test_failure_still_exits_zero(self, mock_http, sample_pdf):
        mock_http.post.return_value = httpx.Response(500, text="internal error")
        result = runner.invoke(app, ["extract", str(sample_pdf)])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert payload["error"] == "API error: 500 - internal error"

    def test_uses_config_file(self, mock_http, sample_pdf, isolated_config_dirs):
        cfg = isolated_config_dirs / "alt.yaml"
        cfg.write_text("output_format: json\napi_key: sk-from-file\n")

        result = runner.invoke(app, ["--config", str(cfg), "extract", str(sample_pdf)])

        assert result.exit_code == 0
        data = mock_http.post.call_args.kwargs["data"]
        assert json.loads(data["output_formats"]) == ["json"]
        assert data["api_key"] == "sk-from-file"

    def test_bad_config_file_exits_one(self, mock_http, sample_pdf, isolated_config_dirs):
        cfg = isolated_config_dirs / "broken.yaml"
        cfg.write_text("timeout: -3\n")

        result = runner.invoke(app, ["--config", str(cfg), "extract", str(sample_pdf)])

        assert result.exit_code == 1
        assert "Invalid config" in result.output


# ---------------------------------------------------------------------------
# somark status
# ---------------------------------------------------------------------------


class TestStatusCommand:
    def test_reports_key_presence_only(self):
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["plugin"] == "somark-sync"
        assert payload["status"] == "running"
        assert payload["config"] == {"has_api_key": True, "output_format": "both"}
        assert "sk-cli-secret" not in result.output


# ---------------------------------------------------------------------------
# somark config
# ---------------------------------------------------------------------------


class TestConfigCommands:
    def test_show_masks_api_key(self):
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "sk-cli-secret" not in result.output
        assert "output_format" in result.output

    def test_init_creates_file(self, isolated_config_dirs):
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert (isolated_config_dirs / "somark.yaml").exists()

    def test_init_refuses_overwrite(self, isolated_config_dirs):
        (isolated_config_dirs / "somark.yaml").write_text("timeout: 10\n")
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1
        assert (isolated_config_dirs / "somark.yaml").read_text() == "timeout: 10\n"

    def test_init_force_overwrites(self, isolated_config_dirs):
        (isolated_config_dirs / "somark.yaml").write_text("timeout: 10\n")
        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        assert "output_format" in (isolated_config_dirs / "somark.yaml").read_text()

    def test_init_custom_path_is_loadable(self, isolated_config_dirs):
        target = isolated_config_dirs / "conf" / "alt.yaml"
        result = runner.invoke(app, ["config", "init", "--path", str(target)])

        assert result.exit_code == 0
        assert target.exists()
        assert "--config" in result.output

        status = runner.invoke(app, ["--config", str(target), "status"])
        assert json.loads(status.stdout)["config"]["output_format"] == "both"
