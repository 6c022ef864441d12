#!/usr/bin/env python
"""Command line interface for pynotesync."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from pynotesync.cli.commands import config, notes

app = typer.Typer(help="Optimistically synchronized notes from the command line")
err_console = Console(stderr=True)

# Add command groups
app.add_typer(notes.app, name="notes")
app.add_typer(config.app, name="config")


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logs"),
):
    """Create, edit, order and sync notes against a remote note store."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
