"""Small helpers shared across the package."""

import base64
import mimetypes
import time
from typing import Optional


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Wrap raw image bytes as a base64 ``data:`` URI."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def file_to_data_uri(path: str, mime_type: Optional[str] = None) -> str:
    """Read an image file and return it as a ``data:`` URI.

    Raises ValueError when the file does not look like an image.
    """
    guessed = mime_type or mimetypes.guess_type(path)[0]
    if not guessed or not guessed.startswith("image/"):
        raise ValueError(f"Not an image file: {path}")
    with open(path, "rb") as f:
        return to_data_uri(f.read(), guessed)
