"""Purge command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import session

app = typer.Typer(help="Delete a note permanently")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_id: str = typer.Argument(..., help="Note ID or unique prefix"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete without confirmation"
    ),
):
    """Delete a note permanently. This cannot be undone."""
    if not force:
        confirm = typer.confirm(f"Are you sure you want to purge note {note_id}?")
        if not confirm:
            console.print("Operation cancelled")
            return

    def _purge(svc):
        note = svc.get(note_id)
        svc.engine.purge(note.id)
        return note

    try:
        note = session.run_with_service(_purge)
        console.print(f"Purged note [bold]{note.id}[/bold]")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
