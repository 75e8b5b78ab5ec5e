from unittest.mock import patch

import pytest

from notesapi.server import HttpServer, create_app


class RecordingUsers:
    def __init__(self):
        self.calls = []

    def list_users(self):
        self.calls.append(("list_users",))
        return b"[]", 200

    def get_user(self, user_id):
        self.calls.append(("get_user", user_id))
        return b'{"id":"u1"}', 200

    def create_user(self, body):
        self.calls.append(("create_user", body))
        return b'{"id":"new"}', 201

    def delete_user(self, user_id):
        self.calls.append(("delete_user", user_id))
        return b"", 204


class RecordingNotes:
    def __init__(self):
        self.calls = []

    def list_notes(self, user_id):
        self.calls.append(("list_notes", user_id))
        return b"[]", 200

    def get_note(self, user_id, note_id):
        self.calls.append(("get_note", user_id, note_id))
        return b'{"id":"n1"}', 200

    def create_note(self, user_id, body):
        self.calls.append(("create_note", user_id, body))
        return b'{"id":"n2"}', 201

    def delete_note(self, note_id, user_id):
        self.calls.append(("delete_note", note_id, user_id))
        return b"", 204


@pytest.fixture
def controllers():
    return RecordingUsers(), RecordingNotes()


@pytest.fixture
def client(controllers):
    users, notes = controllers
    return create_app(users, notes).test_client()


def test_list_users_route(client, controllers):
    response = client.get("/v1/users")
    assert response.status_code == 200
    assert response.data == b"[]"
    assert response.headers["Content-Type"] == "application/json"
    assert controllers[0].calls == [("list_users",)]


def test_get_user_passes_id(client, controllers):
    response = client.get("/v1/users/u1")
    assert response.data == b'{"id":"u1"}'
    assert controllers[0].calls == [("get_user", "u1")]


def test_create_user_passes_raw_body(client, controllers):
    response = client.post("/v1/users", data=b'{"name":"alice"}')
    assert response.status_code == 201
    assert controllers[0].calls == [("create_user", b'{"name":"alice"}')]


def test_delete_user_route(client, controllers):
    response = client.delete("/v1/users/u9")
    assert response.status_code == 204
    assert response.data == b""
    assert controllers[0].calls == [("delete_user", "u9")]


def test_delete_note_passes_note_id_first(client, controllers):
    response = client.delete("/v1/users/u1/notes/n1")
    assert response.status_code == 204
    assert controllers[1].calls == [("delete_note", "n1", "u1")]


def test_get_note_passes_user_id_first(client, controllers):
    response = client.get("/v1/users/u1/notes/n1")
    assert response.status_code == 200
    assert controllers[1].calls == [("get_note", "u1", "n1")]


def test_list_notes_route(client, controllers):
    response = client.get("/v1/users/u1/notes")
    assert response.data == b"[]"
    assert controllers[1].calls == [("list_notes", "u1")]


def test_create_note_route(client, controllers):
    response = client.post("/v1/users/u1/notes", data=b'{"title":"abc"}')
    assert response.status_code == 201
    assert response.data == b'{"id":"n2"}'
    assert controllers[1].calls == [("create_note", "u1", b'{"title":"abc"}')]


def test_routes_outside_v1_are_not_served(client, controllers):
    response = client.get("/users")
    assert response.status_code == 404
    assert controllers[0].calls == []


def test_serve_uses_server_port(monkeypatch, controllers):
    monkeypatch.setenv("SERVER_PORT", "8082")
    server = HttpServer(*controllers)
    with patch("flask.Flask.run") as run:
        server.serve()
    assert run.call_args.kwargs["port"] == 8082
    assert run.call_args.kwargs["host"] == server.host