# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the MCP server wrapper.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the MCP host and core/:
#     1. tools/list  → core.registry.list_tools()
#     2. tools/call  → core.dispatcher.Dispatcher.dispatch()
#     3. ToolNotFoundError / InvalidArgumentsError → JSON-RPC errors
#     4. ToolResponse → CallToolResult
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate arguments (core/dispatcher.py does)
#   - They do NOT talk to Gemini (core/gemini_client.py does)
# =============================================================================
