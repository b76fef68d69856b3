# =============================================================================
# core/payloads.py  -  generateContent request bodies
# =============================================================================
#
# One builder per tool shape.  All of them are pure: same input, same dict.
# Every payload is a single "user" turn; only the search payload enables the
# googleSearch grounding tool.
#
#   search         parts = [query]                       + googleSearch
#   analyze_file   parts = [file, query]
#   analyze_files  parts = [file_1, ..., file_n, query]
# =============================================================================

from typing import Iterable

from core.models import FilePart, TextPart

GOOGLE_SEARCH_TOOL = "googleSearch"


def _user_turn(parts: Iterable[FilePart]) -> dict:
    return {"role": "user", "parts": [part.to_dict() for part in parts]}


def build_search_payload(query: str) -> dict:
    return {
        "contents": [_user_turn([TextPart(query)])],
        "tools": [{GOOGLE_SEARCH_TOOL: {}}],
    }


def build_file_payload(file_part: FilePart, query: str) -> dict:
    """Single file followed by the instruction text."""
    return {"contents": [_user_turn([file_part, TextPart(query)])]}


def build_files_payload(file_parts: Iterable[FilePart], query: str) -> dict:
    """Files in the given order, then the instruction text as the last part."""
    return {"contents": [_user_turn([*file_parts, TextPart(query)])]}
