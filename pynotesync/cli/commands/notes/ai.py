"""AI text transform command for notes."""

import typer
from rich.console import Console

from pynotesync.cli.utils import render, session
from pynotesync.services.notes import TransformOp

app = typer.Typer(help="Rewrite a note with an AI text transform")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_id: str = typer.Argument(..., help="Note ID or unique prefix"),
    op: TransformOp = typer.Argument(..., help="Transform to apply"),
):
    """Generate a title, summarize, fix grammar or elaborate on a note."""

    async def _transform(svc):
        changed = await svc.transform(note_id, op)
        return changed, svc.get(note_id)

    try:
        changed, note = session.run_with_service(_transform)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if not changed:
        console.print("[yellow]Warning:[/yellow] The transform returned nothing")
        return
    console.print(render.note_panel(note))
