import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from notesapi.entities import Note, User
from notesapi.exceptions import ErrorType, not_found_error
from notesapi.models import Base
from notesapi.repositories import SqlNoteRepository, SqlUserRepository


@pytest.fixture
def engine():
    db = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(db, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(db)
    return db


@pytest.fixture
def users(engine):
    return SqlUserRepository(engine)


@pytest.fixture
def notes(engine):
    return SqlNoteRepository(engine)


def _note(user_id, title="Title"):
    return Note(title=title, content="Content", user_id=user_id)


def test_create_and_get_user(users):
    created = users.create(User(name="Alice"))
    assert created.name == "Alice"
    assert created.created_at is not None
    fetched = users.get(created.id)
    assert (fetched.id, fetched.name) == (created.id, "Alice")


def test_get_missing_user(users):
    with pytest.raises(ErrorType) as info:
        users.get("missing")
    assert info.value == not_found_error("user with id missing not found")


def test_list_users(users):
    names = {users.create(User(name=name)).name for name in ("Alice", "Bob")}
    assert {user.name for user in users.list()} == names


def test_create_user_with_duplicate_id_fails(users):
    users.create(User(id="same", name="Alice"))
    with pytest.raises(ErrorType) as info:
        users.create(User(id="same", name="Bob"))
    assert info.value.status_code == 500
    assert info.value.messages[0] == "failed to create user"


def test_delete_missing_user(users):
    with pytest.raises(ErrorType) as info:
        users.delete("missing")
    assert info.value == not_found_error("user with id missing not found")


def test_delete_user_removes_notes(users, notes):
    user = users.create(User(name="Alice"))
    notes.create(_note(user.id))
    users.delete(user.id)
    assert notes.list(user.id) == []
    with pytest.raises(ErrorType):
        users.get(user.id)


def test_create_note_for_missing_user(notes):
    with pytest.raises(ErrorType) as info:
        notes.create(_note("ghost"))
    assert info.value == not_found_error("user with id ghost not found")


def test_create_and_get_note(users, notes):
    user = users.create(User(name="Alice"))
    created = notes.create(_note(user.id))
    assert created.id
    fetched = notes.get(user.id, created.id)
    assert (fetched.id, fetched.title, fetched.content, fetched.user_id) == (
        created.id, "Title", "Content", user.id,
    )


def test_get_note_of_other_user_is_not_found(users, notes):
    owner = users.create(User(name="Alice"))
    other = users.create(User(name="Bob"))
    created = notes.create(_note(owner.id))
    with pytest.raises(ErrorType) as info:
        notes.get(other.id, created.id)
    assert info.value == not_found_error(f"note with id {created.id} not found")


def test_list_notes_filters_by_user(users, notes):
    alice = users.create(User(name="Alice"))
    bob = users.create(User(name="Bob"))
    notes.create(_note(alice.id, "First"))
    notes.create(_note(alice.id, "Second"))
    notes.create(_note(bob.id, "Third"))
    assert sorted(note.title for note in notes.list(alice.id)) == ["First", "Second"]
    assert len(notes.list("")) == 3


def test_delete_note(users, notes):
    user = users.create(User(name="Alice"))
    created = notes.create(_note(user.id))
    notes.delete(user.id, created.id)
    assert notes.list(user.id) == []


def test_delete_missing_note(notes):
    with pytest.raises(ErrorType) as info:
        notes.delete("u1", "n1")
    assert info.value == not_found_error("note with id n1 and user u1 not found")


def test_delete_note_without_id_fails(notes):
    with pytest.raises(ErrorType) as info:
        notes.delete("u1", "")
    assert info.value.status_code == 500
    assert info.value.messages[0] == "failed to delete note with id  and userId u1"