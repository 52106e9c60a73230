"""zyracss CLI entry point: Click group with subcommands."""

import click

from zyracss import __version__


@click.group()
@click.version_option(version=__version__, prog_name="zyracss")
def cli() -> None:
    """zyracss - compile bracket-syntax utility classes into CSS."""


# Import and register subcommands
from zyracss.cli.build import build  # noqa: E402
from zyracss.cli.check import check  # noqa: E402
from zyracss.cli.serve import serve  # noqa: E402

cli.add_command(build)
cli.add_command(check)
cli.add_command(serve)
