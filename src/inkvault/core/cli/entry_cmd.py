"""inkvault list / read / write / new / verify — day-entry commands."""

from __future__ import annotations

import sys
from datetime import date

import click

from inkvault.core.exceptions import InkvaultError
from inkvault.journal.models import Mood

from .common import entry_file_name, fail, open_store, password_option, require_password


@click.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include entries from previous years.")
@click.option("--grouped", is_flag=True, help="Group entries by month.")
@click.pass_obj
def list_cmd(config, show_all: bool, grouped: bool) -> None:
    """List journal entries, newest first."""
    store = open_store(config)
    try:
        entries = store.list_entries(current_year_only=not show_all)
    except InkvaultError as e:
        fail(str(e))

    if not entries:
        click.echo("No journal entries found.")
        return

    if grouped:
        for group in store.group_entries(entries):
            click.echo(group.label)
            for entry in group.entries:
                click.echo(f"  {entry.display_name}")
    else:
        for entry in entries:
            click.echo(entry.display_name)


@click.command()
@click.argument("name")
@password_option
@click.pass_obj
def read(config, name: str, password: str) -> None:
    """Decrypt and print an entry (e.g. 1403-01-01)."""
    store = open_store(config)
    try:
        click.echo(store.read_entry(entry_file_name(name), password), nl=False)
    except InkvaultError as e:
        fail(str(e))


@click.command()
@click.argument("name")
@click.option("--file", "source", type=click.File("r", encoding="utf-8"), help="Read content from a file.")
@password_option
@click.pass_obj
def write(config, name: str, source, password: str) -> None:
    """Replace an entry's content with text from --file or stdin."""
    store = open_store(config)
    require_password(store, password)

    content = source.read() if source else sys.stdin.read()
    file_name = entry_file_name(name)
    if store.parse_entry(file_name) is None:
        fail(f"'{name}' is not a valid {store.calendar.name} date (YYYY-MM-DD).")
    try:
        store.write_entry(file_name, content, password)
    except InkvaultError as e:
        fail(str(e))
    click.echo(f"Saved {file_name}")


@click.command()
@click.option("--date", "date_string", help="Day in the journal's calendar, YYYY-MM-DD. Defaults to today.")
@click.option("--mood", type=click.IntRange(1, len(Mood)), help="Mood from 1 (🌩️) to 5 (🌈).")
@password_option
@click.pass_obj
def new(config, date_string: str | None, mood: int | None, password: str) -> None:
    """Create today's (or a given day's) entry."""
    store = open_store(config)
    require_password(store, password)

    if date_string:
        day = store.calendar.string_to_date(date_string)
        if day is None:
            fail(f"'{date_string}' is not a valid {store.calendar.name} date (YYYY-MM-DD).")
    else:
        day = date.today()

    try:
        file_name = store.create_entry(day, password, Mood.from_index(mood) if mood else None)
    except InkvaultError as e:
        fail(str(e))
    click.echo(f"Created {file_name}")


@click.command()
@password_option
@click.pass_obj
def verify(config, password: str) -> None:
    """Check that a password opens the journal."""
    store = open_store(config)
    require_password(store, password)
    click.echo("Password OK.")
