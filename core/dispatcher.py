# =============================================================================
# core/dispatcher.py  -  Tool name + arguments → ToolResponse
# =============================================================================
#
# THE TWO-TIER CONTRACT:
#   Before a handler runs:
#     unknown tool        → ToolNotFoundError      (protocol error)
#     arguments off-schema → InvalidArgumentsError  (protocol error)
#   Once a handler runs:
#     anything it raises  → ToolResponse(is_error=True), never re-raised
#
#   The host must be able to tell "you called me wrong" from "I tried and
#   failed", so validation is complete before the handler is entered.
# =============================================================================

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from jsonschema import Draft202012Validator

from core import handlers
from core.errors import InvalidArgumentsError, ToolNotFoundError
from core.gemini_client import GeminiClient
from core.models import InvocationRequest, ToolResponse
from core.registry import ANALYZE_FILE, ANALYZE_FILES, SEARCH, get_tool

logger = logging.getLogger(__name__)

ERROR_PREFIX = "エラーが発生しました: "
UNKNOWN_ERROR_MESSAGE = "不明なエラーが発生しました"

Handler = Callable[[GeminiClient, dict], Awaitable[str]]

_HANDLERS: dict[str, Handler] = {
    SEARCH: handlers.search,
    ANALYZE_FILE: handlers.analyze_file,
    ANALYZE_FILES: handlers.analyze_files,
}


def validate_arguments(tool_name: str, schema: dict, arguments: dict) -> None:
    """Raise InvalidArgumentsError listing every schema violation."""
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(arguments), key=lambda err: [str(p) for p in err.path])
    if errors:
        messages = "; ".join(
            f"{'/'.join(map(str, err.path)) or '<root>'}: {err.message}" for err in errors
        )
        raise InvalidArgumentsError(tool_name, f"Invalid arguments for {tool_name}: {messages}")


def error_response(exc: BaseException) -> ToolResponse:
    """Wrap a handler failure as an isError response with the fixed prefix."""
    message = str(exc) or UNKNOWN_ERROR_MESSAGE
    return ToolResponse(text=ERROR_PREFIX + message, is_error=True)


class Dispatcher:
    """Routes validated invocations to their handler."""

    def __init__(self, client: GeminiClient):
        self.client = client

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResponse:
        """Run one tool call.

        Raises:
            ToolNotFoundError: name is not a registered tool.
            InvalidArgumentsError: arguments do not match the tool schema.

        Failures inside the handler come back as an isError ToolResponse.
        """
        request = InvocationRequest(tool_name=name, arguments=dict(arguments or {}))

        tool = get_tool(request.tool_name)
        handler = _HANDLERS.get(request.tool_name)
        if tool is None or handler is None:
            raise ToolNotFoundError(request.tool_name)

        validate_arguments(tool.name, tool.input_schema, request.arguments)

        try:
            text = await handler(self.client, request.arguments)
        except Exception as e:
            logger.error("%s failed: %s", request.tool_name, e)
            return error_response(e)
        return ToolResponse(text=text)
