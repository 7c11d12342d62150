"""inkvault export — write decrypted entries to plain text files."""

from __future__ import annotations

import click

from inkvault.core.exceptions import InkvaultError
from inkvault.journal.export import export_entries

from .common import entry_file_name, fail, open_store, password_option, require_password


@click.command()
@click.argument("destination", type=click.Path(file_okay=False))
@click.option("--single-file", is_flag=True, help="Concatenate all entries into one file.")
@click.option("--name", "names", multiple=True, help="Export only this entry (repeatable).")
@password_option
@click.pass_obj
def export(config, destination: str, single_file: bool, names: tuple[str, ...], password: str) -> None:
    """Export entries as plaintext into DESTINATION."""
    store = open_store(config)
    require_password(store, password)

    try:
        entries = store.list_entries()
    except InkvaultError as e:
        fail(str(e))
    if names:
        wanted = {entry_file_name(n) for n in names}
        entries = [e for e in entries if e.file_name in wanted]
    if not entries:
        fail("No journals selected for export.")

    try:
        result = export_entries(store, entries, password, destination, single_file=single_file)
    except InkvaultError as e:
        fail(str(e))

    click.echo(f"Export complete. {result.exported} journals written, failures: {result.failed}.")
    for path in result.paths if single_file else []:
        click.echo(f"Wrote {path}")
