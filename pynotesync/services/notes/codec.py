"""
Encoding of structured note content into the single ``content`` text field.

Checklist items are stored one per line as ``- [ ] text`` / ``- [x] text``;
images are inline Markdown image tokens pointing at ``data:image/...`` URIs.
Decoding is total: anything that does not parse degrades to plain text.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .domain import ChecklistItem, StructuredView

LOGGER = logging.getLogger(__name__)

IMAGE_TOKEN_RE = re.compile(r"!\[[^\]\n]*\]\((data:image/[^\s)]*)\)")
CHECKLIST_LINE_RE = re.compile(r"^- \[([ x])\] (.*)$")

IMAGE_ALT = "Image"


def image_token(uri: str) -> str:
    return f"![{IMAGE_ALT}]({uri})"


def checklist_line(item: ChecklistItem) -> str:
    return f"- [{'x' if item.checked else ' '}] {item.text}"


def _split_images(raw: str):
    images = IMAGE_TOKEN_RE.findall(raw)
    return images, IMAGE_TOKEN_RE.sub("", raw)


def decode(raw: Optional[str]) -> StructuredView:
    """Decode a stored ``content`` string into a StructuredView."""
    if not raw:
        return StructuredView()

    images, remaining = _split_images(raw)
    lines = [ln.rstrip("\r") for ln in remaining.split("\n")]
    non_empty = [ln for ln in lines if ln.strip()]

    if not any(CHECKLIST_LINE_RE.match(ln) for ln in non_empty):
        LOGGER.debug("notes.codec.decode prose images=%d", len(images))
        return StructuredView(body_text=remaining.strip(), images=tuple(images))

    items: List[ChecklistItem] = []
    for ln in non_empty:
        m = CHECKLIST_LINE_RE.match(ln)
        if m:
            items.append(ChecklistItem(text=m.group(2), checked=m.group(1) == "x"))
        else:
            # Stray line inside a checklist: keep it rather than drop it
            items.append(ChecklistItem(text=ln, checked=False))
    LOGGER.debug(
        "notes.codec.decode checklist items=%d images=%d", len(items), len(images)
    )
    return StructuredView(checklist_items=tuple(items), images=tuple(images))


def encode(view: StructuredView) -> str:
    """Encode a StructuredView back into a single text field."""
    if view.checklist_items:
        text = "\n".join(
            checklist_line(item) for item in view.checklist_items if item.text.strip()
        )
    else:
        text = view.body_text
    for uri in view.images:
        text += "\n" + image_token(uri)
    return text


def preview(raw: Optional[str], limit: int = 200) -> str:
    """Plain-text rendition of ``raw`` for list displays."""
    view = decode(raw)
    if view.is_checklist:
        text = "\n".join(
            f"{'☑' if item.checked else '☐'} {item.text}"
            for item in view.checklist_items
        )
    else:
        text = view.body_text
    if len(text) > limit:
        return text[: max(limit - 1, 0)] + "…"
    return text
