from __future__ import annotations

from cpeparser.cli.cli import cli


def run() -> None:
    cli()
