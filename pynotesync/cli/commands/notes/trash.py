"""Trash command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import session

app = typer.Typer(help="Move a note to the trash")
console = Console()


@app.callback(invoke_without_command=True)
def main(note_id: str = typer.Argument(..., help="Note ID or unique prefix")):
    """Move a note to the trash. It can be restored until purged."""
    try:
        note = session.run_with_service(
            lambda svc: svc.engine.soft_delete(svc.get(note_id).id)
        )
        console.print(f"Moved note [bold]{note.id}[/bold] to the trash")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
