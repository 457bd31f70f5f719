from __future__ import annotations

from typing import List

import click

from shoppub.schemas import Publication


def print_publications(label: str, publications: List[Publication]) -> None:
    click.echo()
    click.echo(f"{label} ({len(publications)})")
    click.echo()
    for p in publications:
        click.echo(f"* {p.name} ({p.gid})")
    click.echo()
