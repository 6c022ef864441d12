"""Example of how to use the Notes service."""

import argparse
import asyncio
import logging
import os

import requests
from rich.console import Console
from rich.traceback import install

from pynotesync.services.notes import (
    MemoryNoteStore,
    NoteFilter,
    NotesService,
    ViewMode,
    codec,
)

install(show_locals=True)

console = Console()


def print_notes(service: NotesService, note_filter: NoteFilter) -> None:
    pinned, others = service.engine.sections(note_filter)
    for note in pinned + others:
        marker = "*" if note.is_pinned else " "
        console.print(f"{marker} [bold]{note.title or '(untitled)'}[/bold]")
        for line in codec.preview(note.content, limit=120).splitlines():
            console.print(f"    {line}")


async def run(service: NotesService) -> None:
    async with service:
        engine = service.engine
        shopping = engine.create("Shopping", "- [ ] eggs\n- [ ] milk", labels=["home"])
        engine.create("Ideas", "Write the quarterly summary")
        engine.toggle_pin(shopping.id)

        editor = service.edit(shopping.id)
        editor.add_item("coffee")
        editor.toggle_item(0)
        editor.close()

        console.rule("Notes")
        print_notes(service, NoteFilter())
        console.rule("Label: home")
        print_notes(service, NoteFilter(ViewMode.NOTES, label="home"))
        console.print(f"Save status: {engine.status.value}")


def main():
    """Main function."""
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Notes service example.")
    parser.add_argument("--store-url", help="PostgREST base URL (default: in memory)")
    parser.add_argument("--owner", type=int, default=1, help="Owner id")
    args = parser.parse_args()

    session = requests.Session()
    if args.store_url:
        service = NotesService(
            args.store_url,
            session,
            api_key=os.getenv("PYNOTESYNC_API_KEY", ""),
            owner_id=args.owner,
        )
    else:
        service = NotesService(
            "memory://", session, owner_id=args.owner, store=MemoryNoteStore()
        )
    asyncio.run(run(service))


if __name__ == "__main__":
    main()
