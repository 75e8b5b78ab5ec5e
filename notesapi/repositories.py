"""Storage of users and notes in a relational database."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from notesapi.entities import Note, User
from notesapi.exceptions import internal_server_error, not_found_error
from notesapi.models import NoteModel, UserModel

_FOREIGN_KEY_VIOLATION = "23503"
_MISSING_WHERE = "WHERE conditions required"


def _is_foreign_key_violation(error: IntegrityError) -> bool:
    orig = error.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == _FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY constraint failed" in str(orig)


class _SqlRepository:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _session(self) -> Session:
        return Session(self._engine, expire_on_commit=False)


class SqlNoteRepository(_SqlRepository):
    """Notes stored in the notes table."""

    def get(self, user_id: str, note_id: str) -> Note:
        """Return the note; empty identifiers are not used as filters."""
        query = select(NoteModel)
        if user_id:
            query = query.where(NoteModel.user_id == user_id)
        if note_id:
            query = query.where(NoteModel.id == note_id)
        query = query.order_by(NoteModel.id).limit(1)
        with self._session() as session:
            model = session.scalars(query).first()
        if model is None:
            raise not_found_error(f"note with id {note_id} not found")
        return model.to_entity()

    def create(self, note: Note) -> Note:
        """Store *note* and return it with its id and timestamps."""
        model = NoteModel.from_entity(note)
        try:
            with self._session() as session, session.begin():
                session.add(model)
        except IntegrityError as exc:
            if _is_foreign_key_violation(exc):
                raise not_found_error(f"user with id {note.user_id} not found") from exc
            raise internal_server_error("failed to create note", str(exc)) from exc
        except SQLAlchemyError as exc:
            raise internal_server_error("failed to create note", str(exc)) from exc
        return model.to_entity()

    def delete(self, user_id: str, note_id: str) -> None:
        """Delete the note with id *note_id*."""
        failure = f"failed to delete note with id {note_id} and userId {user_id}"
        if not note_id:
            raise internal_server_error(failure, _MISSING_WHERE)
        try:
            with self._session() as session, session.begin():
                result = session.execute(delete(NoteModel).where(NoteModel.id == note_id))
        except SQLAlchemyError as exc:
            raise internal_server_error(failure, str(exc)) from exc
        if result.rowcount == 0:
            raise not_found_error(f"note with id {note_id} and user {user_id} not found")

    def list(self, user_id: str) -> list[Note]:
        """Return the notes of *user_id*, or all notes when it is empty."""
        query = select(NoteModel)
        if user_id:
            query = query.where(NoteModel.user_id == user_id)
        try:
            with self._session() as session:
                models = session.scalars(query).all()
        except SQLAlchemyError as exc:
            raise internal_server_error(
                f"failed to list notes from userId {user_id}", str(exc)
            ) from exc
        return [model.to_entity() for model in models]


class SqlUserRepository(_SqlRepository):
    """Users stored in the users table."""

    def get(self, user_id: str) -> User:
        """Return the user; an empty id matches the first user."""
        query = select(UserModel)
        if user_id:
            query = query.where(UserModel.id == user_id)
        query = query.order_by(UserModel.id).limit(1)
        with self._session() as session:
            model = session.scalars(query).first()
        if model is None:
            raise not_found_error(f"user with id {user_id} not found")
        return model.to_entity()

    def create(self, user: User) -> User:
        """Store *user* and return it with its id and timestamps."""
        model = UserModel.from_entity(user)
        try:
            with self._session() as session, session.begin():
                session.add(model)
        except SQLAlchemyError as exc:
            raise internal_server_error("failed to create user", str(exc)) from exc
        return model.to_entity()

    def delete(self, user_id: str) -> None:
        """Delete the user together with all of their notes."""
        failure = f"failed to delete user with id {user_id}"
        if not user_id:
            raise internal_server_error(failure, _MISSING_WHERE)
        try:
            with self._session() as session, session.begin():
                session.execute(delete(NoteModel).where(NoteModel.user_id == user_id))
                result = session.execute(delete(UserModel).where(UserModel.id == user_id))
        except SQLAlchemyError as exc:
            raise internal_server_error(failure, str(exc)) from exc
        if result.rowcount == 0:
            raise not_found_error(f"user with id {user_id} not found")

    def list(self) -> list[User]:
        """Return all users."""
        try:
            with self._session() as session:
                models = session.scalars(select(UserModel)).all()
        except SQLAlchemyError as exc:
            raise internal_server_error("failed to list users", str(exc)) from exc
        return [model.to_entity() for model in models]