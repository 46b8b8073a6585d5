"""CLI command: silkcss serve -- run the development style server."""

from __future__ import annotations

import sys

import click

from silkcss.cli.inputs import configure_logging, resolve_config
from silkcss.errors import ConfigError


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=5000, type=int, help="Port to bind to")
@click.option("--config", "config_path", type=click.Path(exists=True), default=None, help="JSON config file")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def serve(host: str, port: int, config_path: str | None, debug: bool) -> None:
    """Start the development server that compiles styles on request."""
    from silkcss.web.app import create_app

    configure_logging(debug)
    try:
        config = resolve_config(config_path)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    app = create_app(config=config)
    click.echo(f"Starting silkcss dev server on {host}:{port}")
    app.run(host=host, port=port, debug=debug)
