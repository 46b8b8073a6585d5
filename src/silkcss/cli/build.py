"""CLI command: silkcss build -- compile style objects into a stylesheet."""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from pathlib import Path

import click

from silkcss.cli.inputs import configure_logging, load_style_items, resolve_config
from silkcss.errors import SilkError
from silkcss.pipeline import build_output, compile_unit, load_registry, save_registry
from silkcss.registry import AtomicRegistry


@click.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option("--config", "config_path", type=click.Path(exists=True), default=None, help="JSON config file")
@click.option("--out", "out_path", default=None, help="Stylesheet output path (stdout if omitted)")
@click.option("--manifest", "manifest_path", default=None, help="Write rule pairs, stats and per-style results as JSON")
@click.option("--layers/--no-layers", default=None, help="Override cascade layer output")
@click.option("--critical-out", default=None, help="Write critical CSS here; the stylesheet then holds the rest")
@click.option("--registry", "registry_path", default=None, help="Registry export to start from and update")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def build(
    input_file: str,
    config_path: str | None,
    out_path: str | None,
    manifest_path: str | None,
    layers: bool | None,
    critical_out: str | None,
    registry_path: str | None,
    verbose: bool,
) -> None:
    """Compile the style objects in INPUT_FILE into one atomic stylesheet.

    Diagnostics are reported on stderr; partially resolved styles still
    produce output for the keys that did resolve.
    """
    configure_logging(verbose)

    try:
        config = resolve_config(config_path)
        if layers is not None:
            config = config.with_overrides(layers=replace(config.layers, enabled=layers))
        items = load_style_items(input_file)
        if registry_path and Path(registry_path).exists():
            registry = load_registry(registry_path, config)
        else:
            registry = AtomicRegistry(config)
        unit = compile_unit(items, registry, config)
    except SilkError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for diag in unit.diagnostics:
        click.echo(str(diag), err=True)

    output = build_output(registry, config)
    stylesheet = output.stylesheet
    if critical_out:
        Path(critical_out).write_text(output.critical_css, encoding="utf-8")
        stylesheet = output.non_critical_css

    if out_path:
        Path(out_path).write_text(stylesheet, encoding="utf-8")
    else:
        click.echo(stylesheet)

    if manifest_path:
        manifest = output.to_dict()
        manifest["styles"] = [result.to_dict() for result in unit.results]
        Path(manifest_path).write_text(json.dumps(manifest, indent=2), encoding="utf-8")

    if registry_path:
        save_registry(registry, registry_path)

    partial = len(unit.partial_results)
    click.echo(
        f"Built {output.stats.unique_atoms} atom(s) from {len(unit.results)} style(s)"
        + (f", {partial} partially resolved" if partial else ""),
        err=True,
    )
