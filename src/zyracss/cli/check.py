"""CLI command: zyracss check -- parse tokens and report each verdict."""

from __future__ import annotations

import sys

import click

from zyracss.engine import Engine
from zyracss.errors import Failure


@click.command()
@click.argument("tokens", nargs=-1, required=True)
def check(tokens: tuple[str, ...]) -> None:
    """Parse and validate each TOKEN.

    Prints the resolved declaration for valid classes and the failure with
    suggestions for the rest. Exits with code 1 if any token fails.
    """
    failed = 0
    with Engine() as engine:
        for token in tokens:
            result = engine.parse(token)
            if isinstance(result, Failure):
                failed += 1
                click.echo(f"FAIL {result}")
            else:
                click.echo(f"OK   {token} -> {result.property}: {result.value}")

    click.echo()
    click.echo(f"Summary: {len(tokens) - failed} ok, {failed} failed")
    if failed:
        sys.exit(1)
