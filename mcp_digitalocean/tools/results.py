"""
Result envelopes returned by every tool and resource invocation.

An invocation ends in exactly one of:
- `Success`: a serialized payload and its MIME type;
- `Failure`: a human-readable message tagged with who has to fix it
  (the caller, or the backend);
- `InternalError` raised out of the dispatch call, for payloads that cannot be
  serialized and other programming errors. Those are never folded into an
  envelope.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from mcp import types
from pydantic import BaseModel

JSON_MIME = "application/json"
TEXT_MIME = "text/plain"

# Prefix of every backend failure message; automated checks match on it.
BACKEND_ERROR_MARKER = "api error"


class ErrorKind(str, Enum):
    CALLER_INPUT = "caller_input"
    BACKEND = "backend"


class InternalError(Exception):
    """A well-formed invocation could not be answered because of a bug on our side."""


@dataclass(frozen=True)
class Success:
    text: str
    mime_type: str = JSON_MIME

    is_error = False

    def payload(self) -> Any:
        """Decode the serialized payload (JSON results only)."""
        if self.mime_type != JSON_MIME:
            return self.text
        return json.loads(self.text)

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.text)],
            isError=False,
        )


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    is_error = True

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.message)],
            isError=True,
        )


ToolResult = Union[Success, Failure]


def success(payload: Any, mime_type: str = JSON_MIME) -> Success:
    """Serialize `payload` as pretty-printed JSON, keeping its field order."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    try:
        text = json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InternalError(f"marshal error: {e}") from e
    return Success(text=text, mime_type=mime_type)


def message(text: str) -> Success:
    """Plain-text success, e.g. "Firewall deleted successfully"."""
    return Success(text=text, mime_type=TEXT_MIME)


def caller_error(message: str) -> Failure:
    return Failure(kind=ErrorKind.CALLER_INPUT, message=message)


def backend_error(context: str, err: BaseException) -> Failure:
    text = str(err)
    if context:
        text = f"{context}: {text}"
    return Failure(kind=ErrorKind.BACKEND, message=text)
