"""Check command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import session

app = typer.Typer(help="Toggle a checklist item")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_id: str = typer.Argument(..., help="Note ID or unique prefix"),
    index: int = typer.Argument(..., help="Item number, starting at 1"),
):
    """Toggle a checklist item between done and not done."""

    def _toggle(svc):
        editor = svc.edit(note_id)
        items = editor.view.checklist_items
        if not 1 <= index <= len(items):
            editor.discard()
            raise ValueError(f"Note has {len(items)} checklist item(s)")
        editor.toggle_item(index - 1)
        editor.close()
        return editor.view.checklist_items[index - 1]

    try:
        item = session.run_with_service(_toggle)
        state = "done" if item.checked else "not done"
        console.print(f"[bold]{item.text}[/bold] marked {state}")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)
