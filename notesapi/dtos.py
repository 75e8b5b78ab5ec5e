"""JSON request and response bodies for notes and users."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from typing import Any, TypeVar

from notesapi.entities import Note, User

_T = TypeVar("_T")

_TIMESTAMP = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


def _field(json_name: str, validate: str | None = None, *, is_time: bool = False) -> Any:
    metadata: dict[str, Any] = {"json": json_name, "time": is_time}
    if validate:
        metadata["validate"] = validate
    return field(default=None if is_time else "", metadata=metadata)


def _format_time(value: datetime) -> str:
    """Format *value* as RFC 3339 with trailing fractional zeros trimmed."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    fraction = f"{value.microsecond:06d}".rstrip("0")
    if fraction:
        text += "." + fraction
    offset = value.utcoffset() or timedelta(0)
    if not offset:
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(raw: Any, name: str) -> datetime:
    if not isinstance(raw, str):
        raise ValueError(f"cannot unmarshal {_kind(raw)} into field {name} of type time")
    match = _TIMESTAMP.match(raw)
    if match is None:
        raise ValueError(f"cannot parse {raw!r} as RFC 3339 time for field {name}")
    base, fraction, offset = match.groups()
    micro = (fraction or "")[:6].ljust(6, "0")
    if offset == "Z":
        offset = "+00:00"
    try:
        return datetime.fromisoformat(f"{base}.{micro}{offset}")
    except ValueError as exc:
        raise ValueError(f"cannot parse {raw!r} as RFC 3339 time for field {name}") from exc


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def _lookup(data: Mapping[str, Any], name: str) -> str | None:
    if name in data:
        return name
    folded = name.casefold()
    return next((key for key in data if isinstance(key, str) and key.casefold() == folded), None)


def _load(cls: type[_T], data: Any) -> _T:
    if not isinstance(data, Mapping):
        raise ValueError(f"cannot unmarshal {_kind(data)} into {cls.__name__}")
    values: dict[str, Any] = {}
    for spec in fields(cls):  # type: ignore[arg-type]
        name = spec.metadata["json"]
        key = _lookup(data, name)
        if key is None or data[key] is None:
            continue
        raw = data[key]
        if spec.metadata["time"]:
            values[spec.name] = _parse_time(raw, name)
        elif isinstance(raw, str):
            values[spec.name] = raw
        else:
            raise ValueError(f"cannot unmarshal {_kind(raw)} into field {name} of type string")
    return cls(**values)


def _dump(obj: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for spec in fields(obj):
        value = getattr(obj, spec.name)
        if spec.metadata["time"] and value is not None:
            value = _format_time(value)
        result[spec.metadata["json"]] = value
    return result


@dataclass
class NoteDTO:
    """The JSON shape of a note."""

    id: str = _field("id")
    title: str = _field("title", "required,min=3")
    content: str = _field("content", "required,min=3")
    user_id: str = _field("user_id", "required")
    created_at: datetime | None = _field("created_at", is_time=True)
    updated_at: datetime | None = _field("updated_at", is_time=True)

    def to_entity(self) -> Note:
        """Return the domain note this body describes."""
        return Note(
            id=self.id,
            title=self.title,
            content=self.content,
            user_id=self.user_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, note: Note) -> NoteDTO:
        """Build the body for a domain note."""
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            user_id=note.user_id,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

    @classmethod
    def from_dict(cls, data: Any) -> NoteDTO:
        """Build a body from decoded JSON; raise ValueError on wrongly typed fields."""
        return _load(cls, data)

    def to_dict(self) -> dict[str, Any]:
        """Return the body as a JSON-ready dictionary."""
        return _dump(self)


@dataclass
class UserDTO:
    """The JSON shape of a user."""

    id: str = _field("id")
    name: str = _field("name", "required,min=3")
    created_at: datetime | None = _field("created_at", is_time=True)
    updated_at: datetime | None = _field("updated_at", is_time=True)

    def to_entity(self) -> User:
        """Return the domain user this body describes."""
        return User(
            id=self.id,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        """Build the body for a domain user."""
        return cls(
            id=user.id,
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    @classmethod
    def from_dict(cls, data: Any) -> UserDTO:
        """Build a body from decoded JSON; raise ValueError on wrongly typed fields."""
        return _load(cls, data)

    def to_dict(self) -> dict[str, Any]:
        """Return the body as a JSON-ready dictionary."""
        return _dump(self)


def notes_from_entities(notes: Iterable[Note] | None) -> list[NoteDTO]:
    """Build bodies for a sequence of notes, keeping their order."""
    return [NoteDTO.from_entity(note) for note in notes or ()]


def users_from_entities(users: Iterable[User] | None) -> list[UserDTO]:
    """Build bodies for a sequence of users, keeping their order."""
    return [UserDTO.from_entity(user) for user in users or ()]