"""CLI command: silkcss inspect -- show class names and diagnostics per style."""

from __future__ import annotations

import sys

import click

from silkcss.cli.inputs import load_style_items, resolve_config
from silkcss.errors import SilkError
from silkcss.pipeline import compile_style
from silkcss.registry import AtomicRegistry


@click.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--config", "config_path", type=click.Path(exists=True), default=None, help="JSON config file")
def inspect(input_file: str, config_path: str | None) -> None:
    """Compile INPUT_FILE and display each style's class names.

    Ends with the registry's deduplication report.
    """
    try:
        config = resolve_config(config_path)
        items = load_style_items(input_file)
    except SilkError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    registry = AtomicRegistry(config)
    for style, origin in items:
        result = compile_style(style, registry, config, origin)
        status = "resolved" if result.resolved else "partial"
        click.echo(f"{origin} [{status}]")
        click.echo(f"  class: {result.class_name or '(none)'}")
        for decl in result.declarations:
            click.echo(f"    {decl.context.describe()}: {decl.body}")
        for diag in result.diagnostics:
            click.echo(f"  {diag}")
    click.echo()
    click.echo(registry.generate_report())
