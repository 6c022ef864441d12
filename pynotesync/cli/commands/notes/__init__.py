"""Notes commands for the pynotesync CLI."""

import typer

from . import (
    add,
    ai,
    archive,
    check,
    color,
    duplicate,
    edit,
    labels,
    list_notes,
    move,
    pin,
    purge,
    restore,
    show,
    trash,
)

app = typer.Typer(help="Note commands")

# Each command is a group with a callback; let options follow its arguments.
SETTINGS = {"allow_interspersed_args": True}

app.add_typer(list_notes.app, name="list", context_settings=SETTINGS)
app.add_typer(add.app, name="add", context_settings=SETTINGS)
app.add_typer(show.app, name="show", context_settings=SETTINGS)
app.add_typer(edit.app, name="edit", context_settings=SETTINGS)
app.add_typer(check.app, name="check", context_settings=SETTINGS)
app.add_typer(color.app, name="color", context_settings=SETTINGS)
app.add_typer(duplicate.app, name="copy", context_settings=SETTINGS)
app.add_typer(pin.app, name="pin", context_settings=SETTINGS)
app.add_typer(archive.app, name="archive", context_settings=SETTINGS)
app.add_typer(trash.app, name="trash", context_settings=SETTINGS)
app.add_typer(restore.app, name="restore", context_settings=SETTINGS)
app.add_typer(purge.app, name="purge", context_settings=SETTINGS)
app.add_typer(move.app, name="move", context_settings=SETTINGS)
app.add_typer(labels.app, name="labels", context_settings=SETTINGS)
app.add_typer(ai.app, name="ai", context_settings=SETTINGS)
