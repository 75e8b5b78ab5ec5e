"""Errors raised by the domain, carrying an HTTP status and messages."""

from __future__ import annotations

import json
from collections.abc import Iterable
from http import HTTPStatus

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _json_bytes(value: object) -> bytes:
    """Encode *value* as compact UTF-8 JSON with HTML-sensitive characters escaped."""
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


class ErrorType(Exception):
    """An error with a status code, a list of messages and a type label."""

    def __init__(self, status_code: int, messages: Iterable[str], error_type: str) -> None:
        self.status_code = int(status_code)
        self.messages = list(messages)
        self.error_type = error_type
        super().__init__(str(self))

    def __str__(self) -> str:
        return "; ".join(self.messages)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code!r}, "
            f"messages={self.messages!r}, error_type={self.error_type!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorType):
            return NotImplemented
        return (
            self.status_code == other.status_code
            and self.messages == other.messages
            and self.error_type == other.error_type
        )

    def __hash__(self) -> int:
        return hash((self.status_code, tuple(self.messages), self.error_type))

    def to_json(self) -> bytes:
        """Return the error as a JSON document."""
        return _json_bytes(
            {
                "status_code": self.status_code,
                "messages": self.messages or None,
                "type": self.error_type,
            }
        )


def internal_server_error(*args: str) -> ErrorType:
    """Build an internal server error from the given messages."""
    return ErrorType(HTTPStatus.INTERNAL_SERVER_ERROR, args, "Internal Server Error")


def validation_error(*args: str) -> ErrorType:
    """Build a validation error from the given messages."""
    return ErrorType(HTTPStatus.BAD_REQUEST, args, "Validation Error")


def not_found_error(*args: str) -> ErrorType:
    """Build a not-found error from the given messages."""
    return ErrorType(HTTPStatus.NOT_FOUND, args, "Not Found Error")


def notes_queue_error(*args: str) -> ErrorType:
    """Build an error for a failure to publish to the notes queue."""
    return ErrorType(HTTPStatus.INTERNAL_SERVER_ERROR, args, "Notes queue error")