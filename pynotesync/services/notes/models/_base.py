from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict

_EXTRA_MODES = ("allow", "forbid", "ignore")


def _extra_mode() -> str:
    """pydantic ``extra`` setting for store rows; ``ignore`` unless overridden."""
    raw = (os.getenv("PYNOTESYNC_EXTRA") or "").strip().lower()
    return raw if raw in _EXTRA_MODES else "ignore"


class RecordModel(BaseModel):
    """
    Base model for rows exchanged with the note store.

    Server-side columns we do not model are dropped by default. Set
    ``PYNOTESYNC_EXTRA=forbid`` (or ``allow``) before import to change that,
    e.g. to catch schema drift while debugging.
    """

    model_config = ConfigDict(extra=_extra_mode())


__all__ = ["RecordModel"]
