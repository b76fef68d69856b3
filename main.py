# =============================================================================
# main.py  -  Entry Point for the Gemini Search MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (GEMINI_API_KEY, optional GEMINI_MODEL_ID, ...)
#   2. Refuses to start if GEMINI_API_KEY is missing
#   3. Serves the search / analyze_file / analyze_files tools over stdio
#
# The host (Claude Desktop, an ADK agent, ...) normally launches this as a
# subprocess and talks to it over stdin/stdout.
# =============================================================================

from tools.mcp_server import main

if __name__ == "__main__":
    main()
