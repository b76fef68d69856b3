# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that flows
# between the MCP layer, the tool handlers, and the Gemini API.
#
# WIRE SHAPES:
#   Gemini's generateContent endpoint speaks camelCase JSON.  The part classes
#   below keep snake_case attributes on the Python side and render the wire
#   shape in to_dict().  Payloads themselves stay plain dicts (see
#   core/payloads.py) so they can be asserted on directly in tests.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Union


# -----------------------------------------------------------------------------
# ToolDefinition - one entry in the tool registry
# -----------------------------------------------------------------------------
# Built once at import time and never mutated.  input_schema is a JSON Schema
# object; the dispatcher validates incoming arguments against it.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDefinition:
    """A named, schema-described operation advertised to the host."""

    name: str
    description: str
    input_schema: dict[str, Any]


@dataclass
class InvocationRequest:
    """One call to one tool, scoped to a single dispatch."""

    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# FilePart - what the file loader produces for each file
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextPart:
    text: str

    def to_dict(self) -> dict:
        return {"text": self.text}


@dataclass(frozen=True)
class InlineDataPart:
    """Binary file content, already base64-encoded for the JSON body."""

    mime_type: str
    data: str

    def to_dict(self) -> dict:
        return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}


FilePart = Union[TextPart, InlineDataPart]


# -----------------------------------------------------------------------------
# GenerationResult - what we keep from a generateContent response
# -----------------------------------------------------------------------------
# rendered_content is the HTML search widget Gemini attaches when the
# googleSearch tool was used.  Empty string when absent.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class GenerationResult:
    text: str
    rendered_content: str = ""


# -----------------------------------------------------------------------------
# ToolResponse - the single output shape of every tool call
# -----------------------------------------------------------------------------
# Exactly one text element, success or failure.  The MCP layer turns this
# into a CallToolResult; is_error maps to the protocol's isError flag.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolResponse:
    text: str
    is_error: bool = False

    @property
    def content(self) -> list[dict]:
        return [{"type": "text", "text": self.text}]

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"content": self.content}
        if self.is_error:
            result["isError"] = True
        return result
