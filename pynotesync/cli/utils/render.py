"""Rich renderables for notes."""

from typing import List

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pynotesync.services.notes import Note, codec

COLOR_STYLES = {
    "default": "white",
    "red": "red",
    "orange": "dark_orange",
    "yellow": "yellow",
    "green": "green",
    "teal": "dark_cyan",
    "blue": "blue",
    "indigo": "slate_blue1",
    "purple": "purple",
    "pink": "hot_pink",
}


def _flags(note: Note) -> str:
    marks = []
    if note.is_pinned:
        marks.append("pinned")
    if note.is_archived:
        marks.append("archived")
    if note.is_trashed:
        marks.append("trashed")
    return ", ".join(marks)


def notes_table(pinned: List[Note], others: List[Note]) -> Table:
    """One row per note, pinned section first; ``#`` is the reorder position."""
    table = Table("#", "ID", "Title", "Preview", "Labels", "Flags")
    for pos, note in enumerate(pinned + others):
        table.add_row(
            str(pos),
            note.id[:8],
            Text(note.title or "(untitled)", style=COLOR_STYLES[note.color.value]),
            codec.preview(note.content, limit=60).replace("\n", " / "),
            ", ".join(note.labels),
            _flags(note),
        )
        if pinned and pos == len(pinned) - 1 and others:
            table.add_section()
    return table


def note_panel(note: Note) -> Panel:
    view = codec.decode(note.content)
    body: List = []
    if view.is_checklist:
        for idx, item in enumerate(view.checklist_items, start=1):
            mark = "[green]☑[/green]" if item.checked else "☐"
            body.append(Text.from_markup(f"{idx:>2}. {mark} ") + Text(item.text))
    elif view.body_text:
        body.append(Text(view.body_text))
    if view.images:
        body.append(Text(f"[{len(view.images)} image(s) attached]", style="dim"))
    meta = f"id={note.id}  color={note.color.value}"
    if note.labels:
        meta += f"  labels={', '.join(note.labels)}"
    if _flags(note):
        meta += f"  ({_flags(note)})"
    body.append(Text(meta, style="dim"))
    return Panel(
        Group(*body),
        title=note.title or "(untitled)",
        border_style=COLOR_STYLES[note.color.value],
    )
