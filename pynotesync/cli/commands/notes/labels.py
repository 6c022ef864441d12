"""Labels command for notes."""

from typing import List, Optional

import typer
from rich.console import Console

from pynotesync.cli.utils import session

app = typer.Typer(help="List labels or change a note's labels")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_id: Optional[str] = typer.Argument(None, help="Note ID or unique prefix"),
    add: List[str] = typer.Option([], "--add", help="Label to add (repeatable)"),
    remove: List[str] = typer.Option(
        [], "--remove", help="Label to remove (repeatable)"
    ),
):
    """Without a note, list every label in use; otherwise add or remove labels."""
    if note_id is None and (add or remove):
        console.print("[bold red]Error:[/bold red] A note ID is required")
        raise typer.Exit(1)

    def _labels(svc):
        if note_id is None:
            return svc.engine.labels()
        note = svc.get(note_id)
        labels = [lb for lb in note.labels if lb not in remove]
        for label in add:
            if label not in labels:
                labels.append(label)
        if labels != list(note.labels):
            svc.engine.update(note.id, labels=labels)
        return labels

    try:
        labels = session.run_with_service(_labels)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if not labels:
        console.print("No labels")
        return
    for label in labels:
        console.print(f"- {label}")
