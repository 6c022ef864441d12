"""Color command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import session
from pynotesync.services.notes import NoteColor

app = typer.Typer(help="Change a note's color")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_id: str = typer.Argument(..., help="Note ID or unique prefix"),
    color: NoteColor = typer.Argument(..., help="New color"),
):
    try:
        note = session.run_with_service(
            lambda svc: svc.engine.set_color(svc.get(note_id).id, color)
        )
        console.print(f"Note [bold]{note.id}[/bold] is now {note.color.value}")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
