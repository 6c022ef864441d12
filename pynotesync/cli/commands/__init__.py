"""Command modules for the pynotesync CLI."""

from pynotesync.cli.commands import config, notes

__all__ = ["config", "notes"]
