"""Shared test helpers (constants and canned Gemini responses)."""

from __future__ import annotations

TEST_API_KEY = "test-key-abc123"
TEST_ENDPOINT = "https://gemini.test/v1alpha/models"
TEST_MODEL = "gemini-test"
GENERATE_URL = f"{TEST_ENDPOINT}/{TEST_MODEL}:generateContent"


def gemini_body(text: str = "answer", rendered_content: str | None = None, camel_case: bool = False) -> dict:
    """Minimal generateContent response body."""
    candidate: dict = {"content": {"role": "model", "parts": [{"text": text}]}}
    if rendered_content is not None:
        if camel_case:
            candidate["groundingMetadata"] = {"searchEntryPoint": {"renderedContent": rendered_content}}
        else:
            candidate["grounding_metadata"] = {"search_entry_point": {"rendered_content": rendered_content}}
    return {"candidates": [candidate]}
