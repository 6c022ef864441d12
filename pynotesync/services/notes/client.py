"""
HTTP note store for a PostgREST (Supabase-style) ``notes`` table.

This is the NoteStore the NotesService wires up by default. It converts rows
to and from the typed records in ``models.records`` and hides HTTP details.
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import urlencode

import requests
from pydantic import ValidationError

from pynotesync.utils import now_ms

from .domain import IndexPatch
from .models.dto import Note
from .models.records import NotePatch, NoteRecord, ReorderEntry

LOGGER = logging.getLogger(__name__)


# ------------------------------- Errors --------------------------------------


class NotesError(Exception):
    """Base Notes transport error."""


class NotesAuthError(NotesError):
    """Rejected API key or row-level security (401/403)."""


class NotesRateLimited(NotesError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class NotesApiError(NotesError):
    """Catch-all API error."""

    def __init__(self, message: str, payload: Optional[object] = None):
        super().__init__(message)
        self.payload = payload


# ------------------------------- Transport -----------------------------------


class _RestClient:
    """
    Minimal HTTP transport:
      - JSON bodies via `json=payload`
      - PostgREST filters passed as query params
      - Bounded debug dumps (PYNOTESYNC_DEBUG_MAX_BYTES)
    """

    def __init__(self, base_url: str, session, headers: Optional[Dict[str, str]]):
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._headers = dict(headers or {})
        LOGGER.debug("Initialized _RestClient with base_url: %s", self._base_url)

    def _build_url(self, path: str, params: Optional[Dict[str, object]]) -> str:
        q = urlencode(params or {}, safe=",*")
        return f"{self._base_url}{path}" + (f"?{q}" if q else "")

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, object]] = None,
        payload: Optional[object] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Optional[object]:
        url = self._build_url(path, params)
        LOGGER.info("%s to %s", method, url)
        try:
            resp = self._session.request(
                method, url, json=payload, headers={**self._headers, **(headers or {})}
            )
        except requests.RequestException as exc:
            LOGGER.error("%s to %s failed: %s", method, url, exc)
            raise NotesApiError(f"Network error: {exc}") from exc
        code = getattr(resp, "status_code", 0)
        LOGGER.debug("%s to %s returned status %d", method, url, code)
        if code >= 400:
            self._dump_http_debug(method.lower(), url, payload, resp)
            if code in (401, 403):
                LOGGER.error("%s to %s failed with auth error: %d", method, url, code)
                raise NotesAuthError(f"HTTP {code}: unauthorized")
            if code == 429:
                retry_after = None
                try:
                    hdr = resp.headers.get("Retry-After")
                    if hdr:
                        retry_after = float(hdr)
                except (TypeError, ValueError):
                    retry_after = None
                LOGGER.warning(
                    "%s to %s was rate-limited. Retry after: %s",
                    method,
                    url,
                    retry_after,
                )
                raise NotesRateLimited(
                    "HTTP 429: rate limited", retry_after=retry_after
                )
            # Try to include server json error if possible
            try:
                body = resp.json()
            except Exception:
                body = getattr(resp, "text", None)
            LOGGER.error("%s to %s failed with code %d", method, url, code)
            raise NotesApiError(f"HTTP {code}", payload=body)
        if code == 204 or not getattr(resp, "content", b""):
            return None
        try:
            return resp.json()
        except Exception:
            self._dump_http_debug(method.lower(), url, payload, resp)
            LOGGER.error("Failed to parse JSON response from %s", url)
            raise NotesApiError(
                "Invalid JSON response", payload=getattr(resp, "text", None)
            )

    @staticmethod
    def _dump_http_debug(op: str, url: str, payload: Optional[object], resp) -> None:
        if not os.getenv("PYNOTESYNC_DEBUG"):
            return
        ts = time.strftime("%Y%m%d-%H%M%S")
        out_dir = os.path.join("workspace", "notes_debug")
        path = os.path.join(out_dir, f"{ts}_{op}_http.txt")
        max_bytes = int(os.getenv("PYNOTESYNC_DEBUG_MAX_BYTES", "524288"))
        body_text = getattr(resp, "text", None) or ""
        if len(body_text) > max_bytes:
            body_text = body_text[:max_bytes] + "\n[truncated]\n"
        try:
            os.makedirs(out_dir, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(f"url={url}\nstatus={getattr(resp, 'status_code', None)}\n")
                f.write("payload=")
                json.dump(payload, f, ensure_ascii=False, default=str)
                f.write("\n\n")
                f.write(body_text)
        except OSError as exc:
            LOGGER.debug("notes.debug.dump_failed %s", exc)


# ------------------------------ Note store -----------------------------------


class RestNoteStore:
    """
    NoteStore over PostgREST. Methods map 1:1 to table operations:
      - GET    /notes?user_id=eq.<owner>
      - POST   /notes
      - PATCH  /notes?id=eq.<id>
      - POST   /notes?on_conflict=id  (merge-duplicates upsert)
      - DELETE /notes?id=eq.<id>
    """

    def __init__(self, base_url: str, session, api_key: str, *, table: str = "notes"):
        self._http = _RestClient(
            f"{base_url.rstrip('/')}/rest/v1",
            session,
            headers={"apikey": api_key, "Authorization": f"Bearer {api_key}"},
        )
        self._path = f"/{table}"
        LOGGER.info("RestNoteStore initialized for table %s.", table)

    def list(self, owner_id: int) -> List[Note]:
        LOGGER.info("Listing notes for owner %s", owner_id)
        data = self._http.request(
            "GET",
            self._path,
            params={
                "select": "*",
                "user_id": f"eq.{owner_id}",
                "order": "order_index.asc.nullslast,created_at.desc",
            },
        )
        if data is None:
            return []
        if not isinstance(data, list):
            raise NotesApiError("Expected a list of rows", payload=data)
        try:
            records = [NoteRecord.model_validate(row) for row in data]
        except ValidationError as e:
            LOGGER.error("List response validation failed: %s", e)
            raise NotesApiError("List response validation failed", payload=data)
        now = now_ms()
        notes = [rec.to_note(now=now) for rec in records]
        LOGGER.info("List returned %d notes.", len(notes))
        return notes

    def insert(self, note: Note, owner_id: int) -> None:
        LOGGER.debug("Inserting note %s", note.id)
        self._http.request(
            "POST",
            self._path,
            payload=[NoteRecord.from_note(note, owner_id).to_payload()],
            headers={"Prefer": "return=minimal"},
        )

    def patch(self, note_id: str, fields: Mapping[str, Any]) -> None:
        payload = NotePatch.from_fields(fields).to_payload()
        if not payload:
            LOGGER.debug("Empty patch for note %s, skipping", note_id)
            return
        LOGGER.debug("Patching note %s fields=%s", note_id, sorted(payload))
        self._http.request(
            "PATCH",
            self._path,
            params={"id": f"eq.{note_id}"},
            payload=payload,
            headers={"Prefer": "return=minimal"},
        )

    def bulk_reorder(self, entries: Sequence[IndexPatch]) -> None:
        if not entries:
            return
        LOGGER.debug("Upserting order for %d notes", len(entries))
        self._http.request(
            "POST",
            self._path,
            params={"on_conflict": "id"},
            payload=[ReorderEntry.from_patch(e).model_dump() for e in entries],
            headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
        )

    def delete(self, note_id: str) -> None:
        LOGGER.debug("Deleting note %s", note_id)
        self._http.request("DELETE", self._path, params={"id": f"eq.{note_id}"})
