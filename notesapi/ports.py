"""Interfaces that the domain and its adapters depend on."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol

from notesapi.entities import Note, User


class CreateNoteRepository(Protocol):
    """Stores a new note and returns it as stored."""

    def create(self, note: Note) -> Note: ...


class NoteQueue(Protocol):
    """Publishes created notes for other consumers."""

    def publish(self, note: Note) -> None: ...


class NoteRepository(Protocol):
    """Reads, lists, creates and deletes notes of a user."""

    def get(self, user_id: str, note_id: str) -> Note: ...

    def list(self, user_id: str) -> list[Note]: ...

    def delete(self, user_id: str, note_id: str) -> None: ...

    def create(self, note: Note) -> Note: ...


class UserRepository(Protocol):
    """Reads, lists, creates and deletes users."""

    def get(self, user_id: str) -> User: ...

    def list(self) -> list[User]: ...

    def create(self, user: User) -> User: ...

    def delete(self, user_id: str) -> None: ...


class Cache(Protocol):
    """A key-value cache of raw bytes."""

    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes, expiration: timedelta) -> None: ...


class Secret(Protocol):
    """Looks up secret values by key."""

    def get(self, key: str) -> bytes: ...


class ErrorHandler(Protocol):
    """Turns errors into a JSON response body and an HTTP status."""

    def handle_panic(self, recovered: Any) -> tuple[bytes, int]: ...

    def handle_error(self, error: BaseException) -> tuple[bytes, int]: ...


class NotesController(Protocol):
    """Handles note requests, returning a response body and a status."""

    def list_notes(self, user_id: str) -> tuple[bytes, int]: ...

    def get_note(self, user_id: str, note_id: str) -> tuple[bytes, int]: ...

    def create_note(self, user_id: str, body: bytes) -> tuple[bytes, int]: ...

    def delete_note(self, note_id: str, user_id: str) -> tuple[bytes, int]: ...


class UsersController(Protocol):
    """Handles user requests, returning a response body and a status."""

    def list_users(self) -> tuple[bytes, int]: ...

    def get_user(self, user_id: str) -> tuple[bytes, int]: ...

    def create_user(self, body: bytes) -> tuple[bytes, int]: ...

    def delete_user(self, user_id: str) -> tuple[bytes, int]: ...


class Server(Protocol):
    """Something that serves the API until stopped."""

    def serve(self) -> None: ...