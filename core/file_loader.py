# =============================================================================
# core/file_loader.py  -  Local files → Gemini content parts
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads files fully into memory and turns each one into a content part:
#     - markdown  → TextPart with the decoded text (multi-file tool only)
#     - PDF       → InlineDataPart(application/pdf, base64)
#     - anything else → InlineDataPart(image/jpeg, base64)
#
# THE SEPARATION OF "CLASSIFY" AND "READ":
#   classify_path() / mime_type_for() look only at the extension.  They never
#   touch the disk, so the routing rules can be tested without any files.
#   Content is never sniffed: a .png still goes out as image/jpeg.
#
# CONCURRENCY:
#   load_parts() reads every file at once (asyncio.gather over worker
#   threads) but returns the parts in the order the paths were given.
#   The first failure fails the whole batch.
# =============================================================================

import asyncio
import base64
import enum
import logging
from pathlib import Path
from typing import Sequence

from core.errors import FileLoadError
from core.models import FilePart, InlineDataPart, TextPart

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
IMAGE_MIME_TYPE = "image/jpeg"


class FileKind(enum.Enum):
    TEXT = "text"
    PDF = "pdf"
    IMAGE = "image"


def classify_path(path: str, allow_text: bool = True) -> FileKind:
    """Classify a path by its lowercase extension.

    Markdown only counts as text when allow_text is set; the single-file
    tool sends every non-PDF file as an image.
    """
    suffix = Path(path).suffix.lower()
    if suffix == ".md" and allow_text:
        return FileKind.TEXT
    if suffix == ".pdf":
        return FileKind.PDF
    return FileKind.IMAGE


def mime_type_for(path: str) -> str:
    if classify_path(path, allow_text=False) is FileKind.PDF:
        return PDF_MIME_TYPE
    return IMAGE_MIME_TYPE


async def read_file_bytes(path: str) -> bytes:
    """Read a whole file without blocking the event loop."""
    try:
        return await asyncio.to_thread(Path(path).read_bytes)
    except OSError as e:
        raise FileLoadError(path, e.strerror or str(e)) from e


def to_part(path: str, data: bytes, allow_text: bool = True) -> FilePart:
    """Build the content part for already-read file bytes."""
    kind = classify_path(path, allow_text=allow_text)
    if kind is FileKind.TEXT:
        return TextPart(text=data.decode("utf-8", errors="replace"))
    return InlineDataPart(
        mime_type=PDF_MIME_TYPE if kind is FileKind.PDF else IMAGE_MIME_TYPE,
        data=base64.b64encode(data).decode("ascii"),
    )


async def load_part(path: str, allow_text: bool = True) -> FilePart:
    data = await read_file_bytes(path)
    logger.debug("Loaded %s (%d bytes)", path, len(data))
    return to_part(path, data, allow_text=allow_text)


async def load_parts(paths: Sequence[str]) -> list[FilePart]:
    """Load several files concurrently, keeping the input order."""
    return list(await asyncio.gather(*(load_part(p) for p in paths)))
