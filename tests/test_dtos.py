from datetime import datetime, timedelta, timezone

import pytest

from notesapi.dtos import (
    NoteDTO,
    UserDTO,
    notes_from_entities,
    users_from_entities,
)
from notesapi.entities import Note, User

CREATED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
UPDATED = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone(timedelta(hours=-3)))


def test_note_entity_round_trip():
    note = Note(
        id="n1",
        title="Title",
        content="Content",
        user_id="u1",
        created_at=CREATED,
        updated_at=UPDATED,
    )
    assert NoteDTO.from_entity(note).to_entity() == note


def test_user_entity_round_trip_drops_notes():
    user = User(id="u1", name="Alice", notes=[Note(id="n")], created_at=CREATED)
    back = UserDTO.from_entity(user).to_entity()
    assert back.id == "u1"
    assert back.name == "Alice"
    assert back.created_at == CREATED
    assert back.notes == []


def test_note_to_dict_key_order_and_nulls():
    data = NoteDTO(title="Test Title", content="Test Content").to_dict()
    assert list(data) == ["id", "title", "content", "user_id", "created_at", "updated_at"]
    assert data["created_at"] is None
    assert data["updated_at"] is None
    assert data["title"] == "Test Title"


def test_utc_time_formats_with_z():
    data = UserDTO(name="Alice", created_at=CREATED).to_dict()
    assert data["created_at"] == "2024-01-02T03:04:05Z"


def test_offset_time_formats_trimmed_fraction():
    stamp = datetime(2024, 1, 2, 3, 4, 5, 500000, tzinfo=timezone(timedelta(hours=2)))
    assert UserDTO(created_at=stamp).to_dict()["created_at"] == "2024-01-02T03:04:05.5+02:00"


@pytest.mark.parametrize("stamp", [CREATED, UPDATED])
def test_dict_round_trip(stamp):
    dto = NoteDTO(id="a", title="abc", content="def", user_id="u", created_at=stamp, updated_at=stamp)
    assert NoteDTO.from_dict(dto.to_dict()) == dto


def test_from_dict_ignores_unknown_and_folds_case():
    dto = UserDTO.from_dict({"NAME": "Bob", "extra": 1})
    assert dto == UserDTO(name="Bob")


def test_from_dict_null_fields_stay_empty():
    dto = NoteDTO.from_dict({"title": None, "created_at": None})
    assert dto == NoteDTO()


def test_from_dict_truncates_nanoseconds():
    dto = NoteDTO.from_dict({"created_at": "2024-01-02T03:04:05.123456789Z"})
    assert dto.created_at.microsecond == 123456
    assert dto.created_at.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "data",
    [
        {"title": 5},
        {"user_id": True},
        {"content": ["x"]},
        {"created_at": "yesterday"},
        {"created_at": "2024-01-02T03:04:05"},
        {"updated_at": 12},
        ["not", "an", "object"],
        "text",
    ],
)
def test_from_dict_rejects_bad_input(data):
    with pytest.raises(ValueError):
        NoteDTO.from_dict(data)


def test_notes_from_entities_keeps_order():
    notes = [Note(id="1", title="a"), Note(id="2", title="b")]
    result = notes_from_entities(notes)
    assert [dto.id for dto in result] == ["1", "2"]
    assert [dto.title for dto in result] == ["a", "b"]


def test_from_entities_of_nothing_is_empty_list():
    assert notes_from_entities(None) == []
    assert users_from_entities([]) == []


def test_users_from_entities():
    users = [User(id="1", name="Ann"), User(id="2", name="Ben")]
    assert users_from_entities(users) == [UserDTO(id="1", name="Ann"), UserDTO(id="2", name="Ben")]