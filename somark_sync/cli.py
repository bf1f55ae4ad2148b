"""CLI entry point for the SoMark sync extractor."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax

from somark_sync.config import OutputFormat, PluginConfig, load_config
from somark_sync.config.loader import CONFIG_FILENAME, DEFAULT_CONFIG_TEMPLATE, config_search_path
from somark_sync.plugin import SomarkSyncPlugin

app = typer.Typer(
    name="somark",
    help="Extract markdown and JSON from PDF/PNG/JPG documents via the SoMark API.",
)

config_app = typer.Typer(help="Manage SoMark configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Global state
_config: PluginConfig | None = None


def _get_config() -> PluginConfig:
    if _config is None:
        return load_config()
    return _config


def _configure_logging(level: str) -> None:
    # stdout carries the JSON result, so logs go to stderr
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _echo_json(payload: dict) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to somark.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(_config.log_level)


@app.command()
def extract(
    file: str = typer.Argument(..., help="Path to the document (PDF, PNG, JPG)"),
    format: OutputFormat | None = typer.Option(
        None, "--format", "-f", help="Output format (markdown|json|both)"
    ),
) -> None:
    """Extract content from a document."""
    plugin = SomarkSyncPlugin(_get_config())
    args: dict = {"file_path": file}
    if format is not None:
        args["format"] = format.value
    result = asyncio.run(plugin.handle_tool(args))
    _echo_json(result)


@app.command()
def status() -> None:
    """Show plugin status and non-secret config facts."""
    _echo_json(SomarkSyncPlugin(_get_config()).status())


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration (API key masked)."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(mode="json"), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    path: str = typer.Option(CONFIG_FILENAME, "--path", "-p", help="Where to write the config file"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Write a starter somark.yaml (API key left blank, read from SOMARK_API_KEY)."""
    target = Path(path)
    if target.exists() and not force:
        rprint(f"[yellow]{target} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
    if target.resolve() not in {p.resolve() for p in config_search_path()}:
        rprint(f"[dim]Not on the default search path; pass --config {target} to use it.[/dim]")


if __name__ == "__main__":
    app()
