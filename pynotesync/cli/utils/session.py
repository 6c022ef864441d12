"""Build a NotesService from configuration and run one CLI action with it."""

import asyncio
import inspect
from typing import Any, Callable, Optional

import requests

from pynotesync.exceptions import ConfigError
from pynotesync.services.notes import GeminiTransformer, NotesService

from . import config


def get_service(owner_id: Optional[int] = None) -> NotesService:
    """Create a NotesService for the configured store and owner."""
    store_url = config.get_setting("store_url")
    if not store_url:
        raise ConfigError("store_url")
    api_key = config.get_setting("api_key") or ""

    session = requests.Session()
    gemini_key = config.get_setting("gemini_api_key")
    transformer = GeminiTransformer(gemini_key, session) if gemini_key else None

    return NotesService(
        store_url,
        session,
        api_key=api_key,
        owner_id=config.get_owner_id(owner_id),
        transformer=transformer,
        autosave_delay=config.get_autosave_delay(),
    )


def run_with_service(
    action: Callable[[NotesService], Any], owner_id: Optional[int] = None
) -> Any:
    """Load the owner's notes, run ``action``, flush and drain writes.

    ``action`` may be a plain function or return an awaitable.
    """

    async def _run():
        service = get_service(owner_id)
        await service.open_session()
        try:
            result = action(service)
            if inspect.isawaitable(result):
                result = await result
            return result
        finally:
            await service.close()

    return asyncio.run(_run())
