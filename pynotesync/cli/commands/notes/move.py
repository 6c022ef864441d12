"""Move command for notes."""

from typing import Optional

import typer
from rich.console import Console

from pynotesync.cli.utils import session
from pynotesync.services.notes import NoteFilter, ViewMode

app = typer.Typer(help="Move a note to another position")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    from_pos: int = typer.Argument(..., help="Current position (the # column)"),
    to_pos: int = typer.Argument(..., help="New position"),
    view: ViewMode = typer.Option(ViewMode.NOTES, help="View the positions refer to"),
    label: Optional[str] = typer.Option(None, help="Label filter of that view"),
):
    """Move a note within its section (pinned or not) of a listed view."""
    note_filter = NoteFilter(view, label)

    def _move(svc):
        shown = svc.engine.visible(note_filter)
        sequence = svc.engine.reorder(from_pos, to_pos, note_filter)
        if not sequence:
            return None, None
        moved = shown[from_pos]
        return moved, [n.id for n in sequence].index(moved.id)

    try:
        moved, position = session.run_with_service(_move)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if moved is None:
        console.print(f"[bold red]Error:[/bold red] No note at position {from_pos}")
        raise typer.Exit(1)
    if position != to_pos:
        console.print("[yellow]Warning:[/yellow] Pinned notes stay above the others")
    console.print(f"Moved [bold]{moved.id}[/bold] to position {position}")
