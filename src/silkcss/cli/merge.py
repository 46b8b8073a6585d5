"""CLI command: silkcss merge -- combine exported registries."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from silkcss.cli.inputs import resolve_config
from silkcss.errors import SilkError
from silkcss.pipeline import save_registry
from silkcss.registry import AtomicRegistry


@click.command()
@click.argument("manifests", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--out", "out_path", required=True, help="Where to write the merged registry export")
@click.option("--config", "config_path", type=click.Path(exists=True), default=None, help="JSON config file")
def merge(manifests: tuple[str, ...], out_path: str, config_path: str | None) -> None:
    """Merge registry exports written by ``build --registry``.

    Usage counts are summed; identical atoms collapse into one.
    """
    try:
        config = resolve_config(config_path)
        registry = AtomicRegistry(config)
        for manifest in manifests:
            data = json.loads(Path(manifest).read_text(encoding="utf-8"))
            registry.merge(data)
    except (SilkError, json.JSONDecodeError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    save_registry(registry, out_path)
    stats = registry.get_stats()
    click.echo(
        f"Merged {len(manifests)} registr{'y' if len(manifests) == 1 else 'ies'}: "
        f"{stats.unique_atoms} unique atom(s), {stats.total_usage} usage(s)"
    )
