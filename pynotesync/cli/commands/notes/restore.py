"""Restore command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import session

app = typer.Typer(help="Restore a note from the trash")
console = Console()


@app.callback(invoke_without_command=True)
def main(note_id: str = typer.Argument(..., help="Note ID or unique prefix")):
    try:
        note = session.run_with_service(
            lambda svc: svc.engine.restore(svc.get(note_id).id)
        )
        console.print(f"Restored note [bold]{note.id}[/bold]")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
