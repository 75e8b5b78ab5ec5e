"""Database tables for users and notes, and their mapping to domain entities."""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, String, event
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from notesapi.entities import Note, User


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base shared by the tables of the API."""


class UserModel(Base):
    """A row of the users table."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[List["NoteModel"]] = relationship(back_populates="user")
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def to_entity(self) -> User:
        """Return the domain user stored in this row."""
        return User(
            id=self.id,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, user: User) -> "UserModel":
        """Build a row from a domain user, keeping timestamps it already has."""
        model = cls(id=user.id, name=user.name)
        if user.created_at is not None:
            model.created_at = user.created_at
        if user.updated_at is not None:
            model.updated_at = user.updated_at
        return model


class NoteModel(Base):
    """A row of the notes table."""

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(String, nullable=False)
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False)
    user: Mapped[Optional[UserModel]] = relationship(back_populates="notes")
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def to_entity(self) -> Note:
        """Return the domain note stored in this row."""
        return Note(
            id=self.id,
            title=self.title,
            content=self.content,
            user_id=self.user_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, note: Note) -> "NoteModel":
        """Build a row from a domain note, keeping timestamps it already has."""
        model = cls(
            id=note.id,
            title=note.title,
            content=note.content,
            user_id=note.user_id,
        )
        if note.created_at is not None:
            model.created_at = note.created_at
        if note.updated_at is not None:
            model.updated_at = note.updated_at
        return model


def _before_insert(mapper, connection, target) -> None:
    now = _now()
    target.created_at = now
    target.updated_at = now
    if not target.id:
        target.id = str(uuid.uuid4())


def _before_update(mapper, connection, target) -> None:
    target.updated_at = _now()


event.listen(UserModel, "before_insert", _before_insert)
event.listen(NoteModel, "before_insert", _before_insert)
event.listen(NoteModel, "before_update", _before_update)