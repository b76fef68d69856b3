"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from core.config import Settings
from core.dispatcher import Dispatcher
from core.gemini_client import GeminiClient
from tests.helpers import TEST_API_KEY, TEST_ENDPOINT, TEST_MODEL


@pytest.fixture
def settings():
    return Settings(api_key=TEST_API_KEY, api_endpoint=TEST_ENDPOINT, model_id=TEST_MODEL)


@pytest.fixture
def client(settings):
    return GeminiClient(settings)


@pytest.fixture
def dispatcher(client):
    return Dispatcher(client)


@pytest.fixture
def sample_files(tmp_path):
    """A markdown note, a PNG and a PDF on disk."""
    md = tmp_path / "a.md"
    md.write_text("Hello", encoding="utf-8")
    png = tmp_path / "b.png"
    png.write_bytes(b"\x89PNG\r\n\x1a\n")
    pdf = tmp_path / "c.PDF"
    pdf.write_bytes(b"%PDF-1.4\n%%EOF")
    return {"md": str(md), "png": str(png), "pdf": str(pdf)}
