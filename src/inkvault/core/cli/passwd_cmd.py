"""inkvault passwd — re-encrypt every entry under a new password."""

from __future__ import annotations

import click

from inkvault.journal.rekey import rekey_store

from .common import fail, open_store


@click.command()
@click.option(
    "--old-password",
    envvar="INKVAULT_PASSWORD",
    prompt="Current password",
    hide_input=True,
    help="Password the entries use now (or set INKVAULT_PASSWORD).",
)
@click.option(
    "--new-password",
    prompt="New password",
    hide_input=True,
    confirmation_prompt=True,
    help="Password to re-encrypt with.",
)
@click.option(
    "--backup",
    "backup_dir",
    type=click.Path(file_okay=False),
    help="Copy all entries into a timestamped folder here first.",
)
@click.pass_obj
def passwd(config, old_password: str, new_password: str, backup_dir: str | None) -> None:
    """Change the journal password.

    A failure partway through leaves some entries under the old password and
    some under the new one. Use --backup.
    """
    store = open_store(config)
    try:
        result = rekey_store(store, old_password, new_password, backup_dir=backup_dir)
    except ValueError as e:
        fail(str(e))

    if result.backup_path:
        click.echo(f"Backup written to {result.backup_path}")
    if not result.ok:
        if result.mixed_passwords:
            click.echo(
                f"{len(result.rekeyed)} of {result.total} entries now use the new password: "
                f"{', '.join(result.rekeyed)}",
                err=True,
            )
        fail(result.message)
    click.echo(f"Password changed for {len(result.rekeyed)} entries.")
