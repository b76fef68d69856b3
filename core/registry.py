# =============================================================================
# core/registry.py  -  The static list of tools this server offers
# =============================================================================
#
# The descriptions are what the host's LLM reads to decide WHEN to call a
# tool, so they say what the tool does and what it needs.  The input
# schemas are plain JSON Schema; the dispatcher validates against them
# before any handler runs.
# =============================================================================

from typing import Optional

from core.models import ToolDefinition

SEARCH = "search"
ANALYZE_FILE = "analyze_file"
ANALYZE_FILES = "analyze_files"

_QUERY_PROPERTY = {"type": "string", "description": "検索クエリ"}

_TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name=SEARCH,
        description="Gemini 2.0とGoogle検索を使用して、最新の情報に基づいた回答を生成",
        input_schema={
            "type": "object",
            "properties": {"query": _QUERY_PROPERTY},
            "required": ["query"],
        },
    ),
    ToolDefinition(
        name=ANALYZE_FILE,
        description="Gemini 2.0を使用して、画像やPDFファイルの内容を分析",
        input_schema={
            "type": "object",
            "properties": {
                "file_path": {
                    "type": "string",
                    "description": "分析するファイルのパス(PDFまたは画像)",
                },
                "query": {
                    "type": "string",
                    "description": "ファイルに対する質問や指示(省略可)",
                },
            },
            "required": ["file_path"],
        },
    ),
    ToolDefinition(
        name=ANALYZE_FILES,
        description="Gemini 2.0を使用して、複数のファイル(Markdown・PDF・画像)をまとめて分析し、整合性を確認",
        input_schema={
            "type": "object",
            "properties": {
                "file_paths": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 1,
                    "description": "分析するファイルのパスの一覧",
                },
                "query": {
                    "type": "string",
                    "description": "ファイル群に対する質問や指示(省略可)",
                },
            },
            "required": ["file_paths"],
        },
    ),
)

_BY_NAME = {tool.name: tool for tool in _TOOLS}


def list_tools() -> tuple[ToolDefinition, ...]:
    """Every tool definition, in a fixed order."""
    return _TOOLS


def get_tool(name: str) -> Optional[ToolDefinition]:
    return _BY_NAME.get(name)
