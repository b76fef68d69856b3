# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the decision logic for the Gemini tool server:
# the tool registry, argument validation, file loading, payload assembly and
# the Gemini HTTP client.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports the MCP SDK.  The protocol wiring lives
#   in tools/, which translates core's exceptions and ToolResponse objects
#   into MCP errors and results.
# =============================================================================
