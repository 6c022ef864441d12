"""Edit command for notes."""

from typing import Optional

import typer
from rich.console import Console

from pynotesync.cli.utils import session

app = typer.Typer(help="Change a note's title or text")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_id: str = typer.Argument(..., help="Note ID or unique prefix"),
    title: Optional[str] = typer.Option(None, help="New title"),
    body: Optional[str] = typer.Option(None, help="New text (replaces a checklist)"),
):
    """Change a note's title or text."""
    if title is None and body is None:
        console.print("[yellow]Warning:[/yellow] No updates specified")
        return

    def _edit(svc):
        editor = svc.edit(note_id)
        if title is not None:
            editor.set_title(title)
        if body is not None:
            editor.set_body(body)
        editor.close()
        return editor.note

    try:
        note = session.run_with_service(_edit)
        console.print(f"Updated note [bold]{note.id}[/bold]")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
