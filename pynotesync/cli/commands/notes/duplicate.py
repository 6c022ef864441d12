"""Copy command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import session

app = typer.Typer(help="Duplicate a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(note_id: str = typer.Argument(..., help="Note ID or unique prefix")):
    """Create a copy of a note in front of all others."""
    try:
        note = session.run_with_service(
            lambda svc: svc.engine.duplicate(svc.get(note_id).id)
        )
        console.print(f"Created copy [bold]{note.id}[/bold]")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
