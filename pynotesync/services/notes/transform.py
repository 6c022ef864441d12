"""
AI text transforms (title generation, summarizing, grammar, elaboration).

The sync engine and codec never depend on this module; callers hand a
transformer to ``EditingSession.apply_transform`` when one is configured.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

import requests

LOGGER = logging.getLogger(__name__)

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-2.5-flash"


class TransformOp(str, Enum):
    GENERATE_TITLE = "generate-title"
    SUMMARIZE = "summarize"
    FIX_GRAMMAR = "fix-grammar"
    ELABORATE = "elaborate"


PROMPTS = {
    TransformOp.GENERATE_TITLE: (
        "Generate a short, concise title (max 6 words) for the following note "
        'content. Do not include quotes or "Title:". Just the title text.'
        "\n\nNote Content:\n{text}"
    ),
    TransformOp.SUMMARIZE: (
        "Summarize the following note content into a concise paragraph or bullet "
        "points if appropriate. Maintain the original tone.\n\nNote Content:\n{text}"
    ),
    TransformOp.FIX_GRAMMAR: (
        "Fix the grammar, spelling, and punctuation of the following text. Do not "
        "change the meaning or style significantly. Return only the corrected "
        "text.\n\nText:\n{text}"
    ),
    TransformOp.ELABORATE: (
        "Elaborate on the following note content. Expand on the ideas presented, "
        "adding relevant details or potential next steps. Keep it organized."
        "\n\nNote Content:\n{text}"
    ),
}


class TextTransformer(ABC):
    """Given text and an operation, return replacement text or ``None``."""

    @abstractmethod
    def transform(self, text: str, op: TransformOp) -> Optional[str]:
        pass


class GeminiTransformer(TextTransformer):
    """TextTransformer backed by the Gemini ``generateContent`` REST call."""

    def __init__(
        self,
        api_key: Optional[str],
        session: Optional[requests.Session] = None,
        *,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
    ):
        self._api_key = api_key or ""
        self._session = session or requests.Session()
        self._model = model
        self._timeout = timeout

    def transform(self, text: str, op: TransformOp) -> Optional[str]:
        if not self._api_key:
            LOGGER.warning("Gemini API key is missing; %s skipped", op.value)
            return None
        if not text or not text.strip():
            return None

        url = f"{GEMINI_ENDPOINT}/{self._model}:generateContent"
        payload = {"contents": [{"parts": [{"text": PROMPTS[op].format(text=text)}]}]}
        LOGGER.info("POST to %s op=%s", url, op.value)
        try:
            resp = self._session.post(
                url,
                params={"key": self._api_key},
                json=payload,
                timeout=self._timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            LOGGER.error("Text transform %s failed: %s", op.value, exc)
            return None

        result = self._extract_text(data)
        LOGGER.debug("Text transform %s returned %d chars", op.value, len(result))
        return result or None

    @staticmethod
    def _extract_text(data) -> str:
        if not isinstance(data, dict):
            return ""
        parts = []
        for candidate in data.get("candidates") or []:
            content = candidate.get("content") or {}
            for part in content.get("parts") or []:
                if isinstance(part.get("text"), str):
                    parts.append(part["text"])
            if parts:
                break
        return "".join(parts).strip()
