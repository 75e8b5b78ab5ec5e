"""Publishing of created notes to a message queue."""

from __future__ import annotations

from typing import Any, Protocol

from notesapi.dtos import NoteDTO
from notesapi.entities import Note
from notesapi.exceptions import _json_bytes, notes_queue_error


class SqsClient(Protocol):
    """The part of a queue client that sends one message."""

    def send_message(self, message_body: str, queue_url: str) -> Any: ...


class NotesQueue:
    """Publishes notes as JSON messages to a single queue."""

    def __init__(self, sqs_client: SqsClient, queue_url: str) -> None:
        self._client = sqs_client
        self._queue_url = queue_url

    def publish(self, note: Note) -> None:
        """Send *note* as JSON; raise a notes queue error if that fails."""
        try:
            body = _json_bytes(NoteDTO.from_entity(note).to_dict()).decode("utf-8")
        except (TypeError, ValueError) as exc:
            raise notes_queue_error(str(exc)) from exc
        try:
            self._client.send_message(message_body=body, queue_url=self._queue_url)
        except Exception as exc:
            raise notes_queue_error(str(exc)) from exc