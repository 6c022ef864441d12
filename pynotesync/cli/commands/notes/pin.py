"""Pin command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import session

app = typer.Typer(help="Pin or unpin a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(note_id: str = typer.Argument(..., help="Note ID or unique prefix")):
    """Toggle whether a note is pinned to the top."""
    try:
        note = session.run_with_service(
            lambda svc: svc.engine.toggle_pin(svc.get(note_id).id)
        )
        state = "Pinned" if note.is_pinned else "Unpinned"
        console.print(f"{state} note [bold]{note.id}[/bold]")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
