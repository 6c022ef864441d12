"""List command for notes."""

from typing import Optional

import typer
from rich.console import Console

from pynotesync.cli.utils import render, session
from pynotesync.services.notes import NoteFilter, ViewMode

app = typer.Typer(help="List notes")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    view: ViewMode = typer.Option(ViewMode.NOTES, help="Which view to list"),
    label: Optional[str] = typer.Option(None, help="Only notes with this label"),
    search: str = typer.Option("", help="Case-insensitive text search"),
):
    """List notes, pinned first."""
    try:
        pinned, others = session.run_with_service(
            lambda svc: svc.engine.sections(NoteFilter(view, label, search))
        )
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if not pinned and not others:
        console.print("No notes here yet")
        return
    console.print(render.notes_table(pinned, others))
