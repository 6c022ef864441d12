"""Optimistic note synchronization client."""

from pynotesync.services.notes import NotesService

__all__ = ["NotesService"]
