"""HTTP routing of the API onto the user and note controllers."""

from __future__ import annotations

import os

from flask import Blueprint, Flask, Response, request

from notesapi.ports import NotesController, UsersController

_JSON = "application/json"


def _respond(body: bytes, status: int) -> Response:
    return Response(body, status=status, content_type=_JSON)


def create_app(users_controller: UsersController, notes_controller: NotesController) -> Flask:
    """Build the web application with every route under ``/v1``."""
    app = Flask(__name__)
    v1 = Blueprint("v1", __name__, url_prefix="/v1")

    @v1.get("/users")
    def list_users() -> Response:
        return _respond(*users_controller.list_users())

    @v1.get("/users/<user_id>")
    def get_user(user_id: str) -> Response:
        return _respond(*users_controller.get_user(user_id))

    @v1.post("/users")
    def create_user() -> Response:
        return _respond(*users_controller.create_user(request.get_data()))

    @v1.delete("/users/<user_id>")
    def delete_user(user_id: str) -> Response:
        return _respond(*users_controller.delete_user(user_id))

    @v1.delete("/users/<user_id>/notes/<note_id>")
    def delete_note(user_id: str, note_id: str) -> Response:
        return _respond(*notes_controller.delete_note(note_id, user_id))

    @v1.get("/users/<user_id>/notes")
    def list_notes(user_id: str) -> Response:
        return _respond(*notes_controller.list_notes(user_id))

    @v1.get("/users/<user_id>/notes/<note_id>")
    def get_note(user_id: str, note_id: str) -> Response:
        return _respond(*notes_controller.get_note(user_id, note_id))

    @v1.post("/users/<user_id>/notes")
    def create_note(user_id: str) -> Response:
        return _respond(*notes_controller.create_note(user_id, request.get_data()))

    app.register_blueprint(v1)
    return app


class HttpServer:
    """Serves the API on the port named by the ``SERVER_PORT`` variable."""

    def __init__(
        self,
        users_controller: UsersController,
        notes_controller: NotesController,
        host: str = "0.0.0.0",
    ) -> None:
        self.host = host
        self.app = create_app(users_controller, notes_controller)

    def serve(self) -> None:
        """Listen for requests until the process is stopped."""
        port = os.environ.get("SERVER_PORT", "")
        self.app.run(host=self.host, port=int(port) if port else 0)