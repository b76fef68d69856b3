# =============================================================================
# tools/mcp_server.py  -  MCP Server (stdio) for the Gemini tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the tools from core/registry.py over MCP.  It is a thin
#   translation layer: all decisions live in core/dispatcher.py.
#
# HOW IT WORKS (the flow):
#   1. The host lists tools        → tools/list  → core.registry.list_tools()
#   2. The host calls a tool       → tools/call  → Dispatcher.dispatch()
#   3. The dispatcher returns a ToolResponse → CallToolResult
#   4. Protocol-tier errors become JSON-RPC errors, not isError results
#
# WHY THE LOW-LEVEL SERVER:
#   The decorator-based call_tool helpers in the MCP SDK (and FastMCP on top
#   of them) turn EVERY exception into an isError result.  Unknown tools and
#   bad arguments must reach the host as METHOD_NOT_FOUND / INVALID_PARAMS,
#   so tools/call is registered directly in request_handlers, where McpError
#   is sent back as a JSON-RPC error.
#
# RUNNING THIS SERVER:
#     a) python main.py
#     b) python -m tools.mcp_server
#     c) gemini-search-mcp   (console script)
# =============================================================================

import asyncio
import contextlib
import json
import logging
import os
import signal
import sys

import mcp.types as types
from dotenv import load_dotenv
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from core.config import Settings, load_settings
from core.dispatcher import Dispatcher
from core.errors import ConfigError, InvalidArgumentsError, ToolNotFoundError
from core.gemini_client import QUIET_LOGGERS, GeminiClient
from core.models import ToolDefinition
from core.registry import list_tools

SERVER_NAME = "gemini-search-server"
SERVER_VERSION = "0.1.0"

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT is the MCP transport, so logs go to STDERR.  Anything printed to
# stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _log_request(tool_name: str, params: dict) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(
        f"{_GREEN}  ← {tool_name} response: "
        f"{json.dumps(result, ensure_ascii=False, separators=(',', ':'))}{_RESET}"
    )
    return result


# =============================================================================
# Protocol translation
# =============================================================================

def to_mcp_tool(tool: ToolDefinition) -> types.Tool:
    """Registry entry -> MCP Tool, schema passed through unchanged."""
    return types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)


async def call_tool(dispatcher: Dispatcher, name: str, arguments: dict | None) -> types.CallToolResult:
    """Dispatch one call, mapping protocol-tier errors onto JSON-RPC codes."""
    _log_request(name, arguments or {})
    try:
        response = await dispatcher.dispatch(name, arguments)
    except ToolNotFoundError as e:
        _log_status(str(e))
        raise McpError(types.ErrorData(code=types.METHOD_NOT_FOUND, message=str(e))) from e
    except InvalidArgumentsError as e:
        _log_status(e.message)
        raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=e.message)) from e

    _log_response(name, response.to_dict())
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=response.text)],
        isError=response.is_error,
    )


def build_server(dispatcher: Dispatcher) -> Server:
    """Create the MCP server with tools/list and tools/call wired up."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [to_mcp_tool(tool) for tool in list_tools()]

    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await call_tool(dispatcher, request.params.name, request.params.arguments)
        return types.ServerResult(result)

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


# =============================================================================
# Server entry point
# =============================================================================
# SIGINT / SIGTERM stop the run loop and then end the process explicitly.
# The stdio transport reads stdin from a worker thread that cannot be
# interrupted, so returning from asyncio.run() alone would hang until the
# host closes stdin.  The exit happens inside the stdio_server block, whose
# task group would otherwise wait on that reader.  A plain EOF on stdin still
# returns normally.
# =============================================================================

def _exit_process(code: int) -> None:
    logging.info("Shutting down")
    sys.stdout.flush()
    sys.stderr.flush()
    logging.shutdown()
    os._exit(code)


async def serve(settings: Settings) -> None:
    server = build_server(Dispatcher(GeminiClient(settings)))
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()

    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    async with stdio_server() as (read_stream, write_stream):
        run_task = asyncio.ensure_future(
            server.run(read_stream, write_stream, server.create_initialization_options())
        )
        stop_task = asyncio.ensure_future(stop.wait())

        logging.info("Gemini Search MCP server running on stdio")
        await asyncio.wait({run_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)

        if not stop.is_set():
            stop_task.cancel()
            try:
                run_task.result()
            except Exception as e:
                logging.error(f"[MCP Error] {e}")
                raise
            return

        run_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await run_task
        _exit_process(0)


def main() -> None:
    load_dotenv()
    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging()
        logging.error(str(e))
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logging.info("Shutting down")


if __name__ == "__main__":
    main()
