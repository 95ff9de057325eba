"""Error classes and helpers for MeetingMate.

Extraction and rendering never fail on content. The structured
exceptions here cover the surrounding layers: bad tool requests and I/O
failures while reading invitations or writing notes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, TypedDict


class ErrorPayload(TypedDict, total=False):
    code: str
    message: str
    details: Dict[str, Any]


@dataclass
class AppError(Exception):
    """Base application error with a code and optional details."""

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> ErrorPayload:
        payload: ErrorPayload = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class BadRequestError(AppError):
    """Raised when a request is invalid or missing required parameters."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("BAD_REQUEST", message, details)


class InputReadError(AppError):
    """Raised when the invitation text cannot be read."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("IO_ERROR", message, details)


class OutputWriteError(AppError):
    """Raised when the rendered notes cannot be written."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("IO_ERROR", message, details)


def to_error_payload(
    error: Exception, *, path_hint: Optional[str] = None
) -> ErrorPayload:
    """Convert an exception into a structured error payload.

    Args:
        error: The exception to convert.
        path_hint: Optional file path that might help with diagnosis.

    Returns:
        A dictionary with `code`, `message` and optional `details`.

    Examples:
        >>> try:
        ...     raise BadRequestError("'text' is required")
        ... except Exception as e:
        ...     payload = to_error_payload(e)
        ...     assert payload["code"] == "BAD_REQUEST"
    """

    if isinstance(error, AppError):
        return error.to_payload()
    # Fallback: wrap generic exceptions
    details: Dict[str, Any] = {}
    if path_hint:
        details["path"] = path_hint
    return {"code": "IO_ERROR", "message": str(error), "details": details}
