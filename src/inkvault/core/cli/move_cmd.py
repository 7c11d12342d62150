"""inkvault move — relocate the journal directory."""

from __future__ import annotations

import click

from inkvault.journal.migrate import migrate_store

from .common import fail, load_settings


@click.command()
@click.argument("destination", type=click.Path(file_okay=False))
@click.pass_obj
def move(config, destination: str) -> None:
    """Move all entries to DESTINATION and remember the new location."""
    settings = load_settings(config)
    result = migrate_store(settings.journal_dir, destination, settings=settings)

    if not result.ok:
        if result.rollback_failures:
            click.echo(f"Stranded in {result.destination}: {', '.join(result.rollback_failures)}", err=True)
        fail(result.message)
    click.echo(result.message)
