# =============================================================================
# core/handlers.py  -  One coroutine per tool
# =============================================================================
#
# Each handler receives arguments that ALREADY passed schema validation,
# so it can index them directly.  Handlers raise on failure; turning that
# into an error payload is the dispatcher's job, not theirs.
#
# The flow is the same for all three:
#   1. load files (file tools only)
#   2. build the payload (core/payloads.py)
#   3. call Gemini (core/gemini_client.py)
#   4. return the text
# =============================================================================

import logging

from core.file_loader import load_part, load_parts
from core.gemini_client import GeminiClient
from core.payloads import build_file_payload, build_files_payload, build_search_payload

logger = logging.getLogger(__name__)

SEARCH_RESULTS_LABEL = "\n\n検索結果:\n"
DEFAULT_FILE_QUERY = "このファイルを分析して、内容を詳しく説明してください。"
DEFAULT_FILES_QUERY = "これらのファイルを分析し、内容の整合性を確認してください。"


async def search(client: GeminiClient, arguments: dict) -> str:
    """Grounded answer, with the rendered search snippet appended if any."""
    result = await client.generate_content(build_search_payload(arguments["query"]))
    if result.rendered_content:
        return result.text + SEARCH_RESULTS_LABEL + result.rendered_content
    return result.text


async def analyze_file(client: GeminiClient, arguments: dict) -> str:
    # .md is NOT special here: anything that isn't a PDF goes out as an image.
    file_part = await load_part(arguments["file_path"], allow_text=False)
    query = arguments.get("query") or DEFAULT_FILE_QUERY
    return await client.generate(build_file_payload(file_part, query))


async def analyze_files(client: GeminiClient, arguments: dict) -> str:
    paths = arguments["file_paths"]
    file_parts = await load_parts(paths)
    logger.debug("Loaded %d files for analysis", len(file_parts))
    query = arguments.get("query") or DEFAULT_FILES_QUERY
    return await client.generate(build_files_payload(file_parts, query))
