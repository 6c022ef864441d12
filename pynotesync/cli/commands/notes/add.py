"""Add command for notes."""

from pathlib import Path
from typing import List

import typer
from rich.console import Console

from pynotesync.cli.utils import session
from pynotesync.services.notes import ChecklistItem, NoteColor, StructuredView, codec
from pynotesync.utils import file_to_data_uri

app = typer.Typer(help="Create a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    title: str = typer.Argument("", help="Note title"),
    body: str = typer.Option("", help="Note text"),
    item: List[str] = typer.Option([], help="Checklist item (repeatable)"),
    image: List[Path] = typer.Option([], help="Image file to embed (repeatable)"),
    color: NoteColor = typer.Option(NoteColor.DEFAULT, help="Note color"),
    label: List[str] = typer.Option([], help="Label (repeatable)"),
):
    """Create a note from text, checklist items and images."""
    if item and body:
        console.print("[yellow]Warning:[/yellow] --item given, ignoring --body")
    try:
        view = StructuredView(
            body_text="" if item else body,
            checklist_items=tuple(ChecklistItem(text) for text in item),
            images=tuple(file_to_data_uri(str(path)) for path in image),
        )
        content = codec.encode(view)
        if not title.strip() and not content.strip():
            console.print("[yellow]Warning:[/yellow] Nothing to save")
            return
        note = session.run_with_service(
            lambda svc: svc.engine.create(title, content, color, label)
        )
        console.print(f"Created note [bold]{note.id}[/bold]")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
