"""Config commands for the pynotesync CLI."""

import os

import typer
from rich.console import Console
from rich.table import Table

from pynotesync.cli.utils import config as cfg

app = typer.Typer(help="Show or change CLI settings")
console = Console()


@app.command("show")
def show():
    """Show the effective settings."""
    stored = cfg.load_config()
    table = Table("Setting", "Value", "Source")
    for key, env_name in cfg.ENV_VARS.items():
        if os.getenv(env_name):
            source = f"env ({env_name})"
        elif key in stored:
            source = "file"
        else:
            source = "-"
        value = cfg.get_setting(key)
        if value and key in cfg.SECRET_KEYS:
            value = f"{str(value)[:4]}…"
        table.add_row(key, "" if value is None else str(value), source)
    console.print(table)


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Setting name"),
    value: str = typer.Argument(..., help="New value"),
):
    """Store a setting in the config file."""
    if key not in cfg.ENV_VARS:
        console.print(
            f"[bold red]Error:[/bold red] Unknown setting {key!r}. "
            f"Known: {', '.join(cfg.ENV_VARS)}"
        )
        raise typer.Exit(1)
    stored = cfg.load_config()
    stored[key] = value
    cfg.save_config(stored)
    console.print(f"Saved [bold]{key}[/bold]")
