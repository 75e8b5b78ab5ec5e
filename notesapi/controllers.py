"""Request handlers for users and notes, producing JSON bodies and statuses."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from http import HTTPStatus
from typing import Any, TypeVar

from notesapi.dtos import NoteDTO, UserDTO, notes_from_entities, users_from_entities
from notesapi.exceptions import _json_bytes, internal_server_error, validation_error
from notesapi.ports import ErrorHandler
from notesapi.usecases import CreateNoteUseCase
from notesapi.validation import validate

logger = logging.getLogger(__name__)

_D = TypeVar("_D", NoteDTO, UserDTO)

_FORBIDDEN_TITLE = "brandlovers"


class _Rejected(Exception):
    """Carries an expected failure to the controller boundary."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(str(error))
        self.error = error


@contextmanager
def _expected_errors() -> Iterator[None]:
    """Mark any failure raised inside the block as an ordinary request error."""
    try:
        yield
    except Exception as exc:
        raise _Rejected(exc) from exc


def _parse(body: bytes, dto_cls: type[_D], error_prefix: str) -> _D:
    try:
        data = json.loads(body)
        return dto_cls() if data is None else dto_cls.from_dict(data)
    except (TypeError, ValueError) as exc:
        raise _Rejected(validation_error(f"{error_prefix}: {exc}")) from exc


def _encode(payload: Any, error_prefix: str) -> bytes:
    try:
        return _json_bytes(payload)
    except (TypeError, ValueError) as exc:
        raise _Rejected(internal_server_error(f"{error_prefix}: {exc}")) from exc


class _Controller:
    def __init__(self, error_handler: ErrorHandler) -> None:
        self._error_handler = error_handler

    def _guard(self, action: Callable[..., tuple[bytes, int]], *args: Any) -> tuple[bytes, int]:
        try:
            return action(*args)
        except _Rejected as rejected:
            return self._error_handler.handle_error(rejected.error)
        except Exception as exc:
            return self._error_handler.handle_panic(exc)


class NotesControllerImpl(_Controller):
    """Handles the note endpoints of a user."""

    def __init__(
        self,
        create_note_use_case: CreateNoteUseCase,
        delete_note_use_case: Any,
        get_note_use_case: Any,
        list_notes_use_case: Any,
        error_handler: ErrorHandler,
    ) -> None:
        super().__init__(error_handler)
        self._create = create_note_use_case
        self._delete = delete_note_use_case
        self._get = get_note_use_case
        self._list = list_notes_use_case

    def create_note(self, user_id: str, body: bytes) -> tuple[bytes, int]:
        """Create a note for *user_id* from a JSON *body*; 201 on success."""
        return self._guard(self._create_note, user_id, body)

    def delete_note(self, note_id: str, user_id: str) -> tuple[bytes, int]:
        """Delete a note of a user; empty body and 204 on success."""
        return self._guard(self._delete_note, note_id, user_id)

    def get_note(self, user_id: str, note_id: str) -> tuple[bytes, int]:
        """Return one note of a user; 200 on success."""
        return self._guard(self._get_note, user_id, note_id)

    def list_notes(self, user_id: str) -> tuple[bytes, int]:
        """Return all notes of a user as a JSON array; 200 on success."""
        return self._guard(self._list_notes, user_id)

    def _create_note(self, user_id: str, body: bytes) -> tuple[bytes, int]:
        logger.info("controller.CreateNote process started userId=%s", user_id)
        note = _parse(body, NoteDTO, "error parsing JSON to note")
        note.user_id = user_id
        with _expected_errors():
            validate(note)
        if note.title == _FORBIDDEN_TITLE:
            raise _Rejected(
                validation_error(
                    f"you cannot create a note with the title '{_FORBIDDEN_TITLE}'"
                )
            )
        with _expected_errors():
            created = self._create.create(note.to_entity())
        response = _encode(NoteDTO.from_entity(created).to_dict(), "error parsing note to JSON")
        status = int(HTTPStatus.CREATED)
        logger.info(
            "controller.CreateNote process finished response=%s status=%d",
            response.decode("utf-8"),
            status,
        )
        return response, status

    def _delete_note(self, note_id: str, user_id: str) -> tuple[bytes, int]:
        logger.info(
            "controller.DeleteNote process started noteId=%s userId=%s", note_id, user_id
        )
        with _expected_errors():
            self._delete.delete(user_id, note_id)
        status = int(HTTPStatus.NO_CONTENT)
        logger.info("controller.DeleteNote process finished status=%d", status)
        return b"", status

    def _get_note(self, user_id: str, note_id: str) -> tuple[bytes, int]:
        logger.info("controller.GetNote process started userId=%s", user_id)
        with _expected_errors():
            note = self._get.get(user_id, note_id)
        response = _encode(NoteDTO.from_entity(note).to_dict(), "error parsing note to JSON")
        status = int(HTTPStatus.OK)
        logger.info(
            "controller.GetNote process finished response=%s status=%d",
            response.decode("utf-8"),
            status,
        )
        return response, status

    def _list_notes(self, user_id: str) -> tuple[bytes, int]:
        logger.info("controller.ListNotes process started userId=%s", user_id)
        with _expected_errors():
            notes = self._list.list(user_id)
        response = _encode(
            [dto.to_dict() for dto in notes_from_entities(notes)],
            "error parsing notes to JSON",
        )
        status = int(HTTPStatus.OK)
        logger.info(
            "controller.ListNotes process finished response=%s status=%d",
            response.decode("utf-8"),
            status,
        )
        return response, status


class UsersControllerImpl(_Controller):
    """Handles the user endpoints."""

    def __init__(
        self,
        create_user_use_case: Any,
        delete_user_use_case: Any,
        get_user_use_case: Any,
        list_users_use_case: Any,
        error_handler: ErrorHandler,
    ) -> None:
        super().__init__(error_handler)
        self._create = create_user_use_case
        self._delete = delete_user_use_case
        self._get = get_user_use_case
        self._list = list_users_use_case

    def create_user(self, body: bytes) -> tuple[bytes, int]:
        """Create a user from a JSON *body*; 201 on success."""
        return self._guard(self._create_user, body)

    def delete_user(self, user_id: str) -> tuple[bytes, int]:
        """Delete a user; empty body and 204 on success."""
        return self._guard(self._delete_user, user_id)

    def get_user(self, user_id: str) -> tuple[bytes, int]:
        """Return one user; 200 on success."""
        return self._guard(self._get_user, user_id)

    def list_users(self) -> tuple[bytes, int]:
        """Return all users as a JSON array; 200 on success."""
        return self._guard(self._list_users)

    def _create_user(self, body: bytes) -> tuple[bytes, int]:
        logger.info(
            "controller.CreateUser process started body=%s",
            body.decode("utf-8", errors="replace"),
        )
        user = _parse(body, UserDTO, "error parsing json to user")
        with _expected_errors():
            validate(user)
        with _expected_errors():
            created = self._create.create(user.to_entity())
        status = int(HTTPStatus.CREATED)
        response = _encode(UserDTO.from_entity(created).to_dict(), "error parsing user to JSON")
        logger.info(
            "controller.CreateUser process finished response=%s status=%d",
            response.decode("utf-8"),
            status,
        )
        return response, status

    def _delete_user(self, user_id: str) -> tuple[bytes, int]:
        logger.info("controller.DeleteUser process started userId=%s", user_id)
        with _expected_errors():
            self._delete.delete(user_id)
        status = int(HTTPStatus.NO_CONTENT)
        logger.info("controller.DeleteUser process finished status=%d", status)
        return b"", status

    def _get_user(self, user_id: str) -> tuple[bytes, int]:
        logger.info("controller.GetUser process started userId=%s", user_id)
        with _expected_errors():
            user = self._get.get(user_id)
        response = _encode(UserDTO.from_entity(user).to_dict(), "error parsing user to JSON")
        status = int(HTTPStatus.OK)
        logger.info(
            "controller.GetUser process finished response=%s status=%d",
            response.decode("utf-8"),
            status,
        )
        return response, status

    def _list_users(self) -> tuple[bytes, int]:
        logger.info("controller.ListUsers process started")
        with _expected_errors():
            users = self._list.list()
        response = _encode(
            [dto.to_dict() for dto in users_from_entities(users)],
            "error parsing users to JSON",
        )
        status = int(HTTPStatus.OK)
        logger.info(
            "controller.ListUsers process finished response=%s status=%d",
            response.decode("utf-8"),
            status,
        )
        return response, status