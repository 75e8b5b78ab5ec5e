"""Turns errors into JSON response bodies and HTTP statuses."""

from __future__ import annotations

import logging
from typing import Any

from notesapi.exceptions import ErrorType, internal_server_error

logger = logging.getLogger(__name__)


class DefaultErrorHandler:
    """Renders domain errors as they are and anything else as a 500."""

    def handle_panic(self, recovered: Any) -> tuple[bytes, int]:
        """Render an unexpected failure; return an empty body and 0 for None."""
        if recovered is None:
            return b"", 0
        return self.handle_error(internal_server_error(f"panic: {recovered}"))

    def handle_error(self, error: BaseException) -> tuple[bytes, int]:
        """Return the JSON body and status code for *error*, and log it."""
        parsed = error if isinstance(error, ErrorType) else internal_server_error(str(error))
        body = parsed.to_json()
        logger.error(
            "errorHandler.HandleError errorDetails=%s", body.decode("utf-8")
        )
        return body, parsed.status_code