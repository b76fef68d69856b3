# =============================================================================
# core/errors.py  -  Exception hierarchy
# =============================================================================
#
# Two tiers, and the difference matters to the host:
#
#   PROTOCOL TIER ("you called me wrong"):
#     ToolNotFoundError, InvalidArgumentsError
#     Raised by the dispatcher BEFORE any handler runs.  The MCP layer turns
#     them into JSON-RPC errors (METHOD_NOT_FOUND / INVALID_PARAMS).
#
#   TOOL TIER ("I tried and failed"):
#     UpstreamError, FileLoadError (and anything else a handler raises)
#     Caught at the dispatch boundary and reported as an isError payload.
# =============================================================================

from typing import Any, Optional


class GeminiSearchError(Exception):
    """Base class for everything this server raises on purpose."""


class ConfigError(GeminiSearchError):
    """Startup configuration is missing or malformed."""


class ToolNotFoundError(GeminiSearchError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArgumentsError(GeminiSearchError):
    def __init__(self, tool_name: str, message: str):
        super().__init__(message)
        self.tool_name = tool_name
        self.message = message


class UpstreamError(GeminiSearchError):
    """The Gemini API call failed or returned something we can't read."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response


class FileLoadError(GeminiSearchError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to read file '{path}': {reason}")
        self.path = path
        self.reason = reason
