"""Domain entities: notes and the users that own them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Note:
    """A note written by a user."""

    id: str = ""
    title: str = ""
    content: str = ""
    user_id: str = ""
    user: User | None = field(default=None, repr=False)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class User:
    """A user who owns notes."""

    id: str = ""
    name: str = ""
    notes: list[Note] = field(default_factory=list, repr=False)
    created_at: datetime | None = None
    updated_at: datetime | None = None