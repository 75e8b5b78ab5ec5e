"""Domain use cases."""

from __future__ import annotations

from notesapi.entities import Note
from notesapi.ports import CreateNoteRepository, NoteQueue


class CreateNoteUseCase:
    """Stores a note and then publishes the stored note to the queue."""

    def __init__(self, create_note_repository: CreateNoteRepository, note_queue: NoteQueue) -> None:
        self._repository = create_note_repository
        self._queue = note_queue

    def create(self, note: Note) -> Note:
        """Store *note*, publish the result and return it.

        Errors from the repository or the queue propagate unchanged; when
        the repository fails nothing is published.
        """
        created = self._repository.create(note)
        self._queue.publish(created)
        return created