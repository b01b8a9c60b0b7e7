from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from ..core.constants import DEFAULT_SUMMARY_TIMEOUT_SECONDS, SUMMARY_FALLBACK, SUMMARY_WORD_LIMIT
from ..core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-3-flash-preview"


def build_prompt(data: Any) -> str:
    return (
        "Analyze this business productivity data and provide a concise, professional executive summary "
        f"(under {SUMMARY_WORD_LIMIT} words). "
        "Include insights on task completion rates, attendance trends, and team performance.\n"
        f"Data: {json.dumps(data, default=str)}"
    )


class SummaryClient:
    """Calls the Gemini ``generateContent`` endpoint asynchronously.

    ``generate`` never raises: any failure is logged and turned into
    ``SUMMARY_FALLBACK`` so entity operations are never blocked by it.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = DEFAULT_MODEL,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_SUMMARY_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._model = model
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def generate(self, data: Any) -> str:
        try:
            return await self._request(data)
        except ExternalServiceError as e:
            logger.warning("Summary generation failed: %s", e)
            return SUMMARY_FALLBACK

    async def _request(self, data: Any) -> str:
        if not self._api_key:
            raise ExternalServiceError("SUMMARY_API_KEY not set")

        url = f"{self._api_url}/models/{self._model}:generateContent"
        payload = {"contents": [{"parts": [{"text": build_prompt(data)}]}]}
        headers = {"x-goog-api-key": self._api_key, "Content-Type": "application/json"}

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.post(url, headers=headers, json=payload)
                response.raise_for_status()
                body = response.json()
            except httpx.HTTPStatusError as e:
                raise ExternalServiceError(f"HTTP {e.response.status_code} from summary API") from e
            except httpx.HTTPError as e:
                raise ExternalServiceError(f"Summary API unreachable: {e!r}") from e
            except ValueError as e:
                raise ExternalServiceError("Summary API returned malformed JSON") from e

        try:
            text = "".join(part.get("text", "") for part in body["candidates"][0]["content"]["parts"])
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ExternalServiceError("Summary API response has no text") from e
        if not text.strip():
            raise ExternalServiceError("Summary API returned empty text")
        return text.strip()
