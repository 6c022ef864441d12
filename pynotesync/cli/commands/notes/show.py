"""Show command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import render, session

app = typer.Typer(help="Show a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(note_id: str = typer.Argument(..., help="Note ID or unique prefix")):
    """Show a note with its checklist and attachments."""
    try:
        note = session.run_with_service(lambda svc: svc.get(note_id))
        console.print(render.note_panel(note))
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
