"""Archive command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import session

app = typer.Typer(help="Archive or unarchive a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(note_id: str = typer.Argument(..., help="Note ID or unique prefix")):
    """Toggle whether a note is archived."""
    try:
        note = session.run_with_service(
            lambda svc: svc.engine.toggle_archive(svc.get(note_id).id)
        )
        state = "Archived" if note.is_archived else "Unarchived"
        console.print(f"{state} note [bold]{note.id}[/bold]")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
