"""silkcss CLI entry point: Click group with subcommands."""

import click

from silkcss import __version__


@click.group()
@click.version_option(version=__version__, prog_name="silkcss")
def cli() -> None:
    """silkcss - atomic CSS generation and deduplication."""


# Import and register subcommands
from silkcss.cli.build import build  # noqa: E402
from silkcss.cli.inspect import inspect  # noqa: E402
from silkcss.cli.merge import merge  # noqa: E402
from silkcss.cli.serve import serve  # noqa: E402

cli.add_command(build)
cli.add_command(inspect)
cli.add_command(merge)
cli.add_command(serve)
