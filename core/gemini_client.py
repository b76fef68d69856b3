# =============================================================================
# core/gemini_client.py  -  Gemini generateContent over HTTP
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends one payload to POST {endpoint}/{model}:generateContent?key=...
#   and pulls out the answer text plus, when present, the rendered search
#   widget from the grounding metadata.
#
# FAILURE MODEL:
#   One attempt, no retries.  Every failure becomes an UpstreamError:
#     - connection / timeout problems (httpx.HTTPError)
#     - non-2xx status
#     - a body without candidates[0].content.parts[0].text
#
# A fresh httpx.AsyncClient is opened per call; nothing is shared between
# invocations.
# =============================================================================

import logging
from typing import Any

import httpx

from core.config import Settings
from core.errors import UpstreamError
from core.models import GenerationResult

logger = logging.getLogger(__name__)

# httpx logs every request URL at INFO, and ours carry ?key=<api key>.
QUIET_LOGGERS = ("httpx", "httpcore")
for _name in QUIET_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)


def _lookup(data: Any, *keys: str) -> Any:
    """Return the first key present in a dict, trying each spelling in turn."""
    if not isinstance(data, dict):
        return None
    for key in keys:
        if key in data:
            return data[key]
    return None


def extract_result(body: Any) -> GenerationResult:
    """Pull answer text and search snippet out of a generateContent body.

    Grounding metadata is read in both snake_case and camelCase; the API
    returns camelCase, older clients documented it in snake_case.
    """
    try:
        candidate = body["candidates"][0]
        text = candidate["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise UpstreamError("Unexpected response format from Gemini API", response=body) from None
    if not isinstance(text, str):
        raise UpstreamError("Unexpected response format from Gemini API", response=body)

    grounding = _lookup(candidate, "grounding_metadata", "groundingMetadata")
    entry_point = _lookup(grounding, "search_entry_point", "searchEntryPoint")
    rendered = _lookup(entry_point, "rendered_content", "renderedContent")

    return GenerationResult(text=text, rendered_content=rendered if isinstance(rendered, str) else "")


class GeminiClient:
    """Thin async client for a single Gemini model."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def generate_content(self, payload: dict) -> GenerationResult:
        url = self.settings.generate_url
        logger.debug("POST %s", url)

        try:
            async with httpx.AsyncClient(timeout=self.settings.timeout) as http:
                response = await http.post(url, params={"key": self.settings.api_key}, json=payload)
        except httpx.HTTPError as e:
            raise UpstreamError(str(e) or type(e).__name__) from e

        if not response.is_success:
            raise UpstreamError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
                response=response.text,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from Gemini API: {e}", status_code=response.status_code) from e

        return extract_result(body)

    async def generate(self, payload: dict) -> str:
        return (await self.generate_content(payload)).text
