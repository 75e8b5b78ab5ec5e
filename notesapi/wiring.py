"""Assembly of the API from its storage, queue and controllers."""

from __future__ import annotations

from sqlalchemy.engine import Engine

from notesapi.controllers import NotesControllerImpl, UsersControllerImpl
from notesapi.error_handler import DefaultErrorHandler
from notesapi.queues import NotesQueue, SqsClient
from notesapi.repositories import SqlNoteRepository, SqlUserRepository
from notesapi.server import HttpServer
from notesapi.usecases import CreateNoteUseCase


def build_server(engine: Engine, sqs_client: SqsClient, queue_url: str) -> HttpServer:
    """Wire repositories, the notes queue and the controllers into a server."""
    notes_repository = SqlNoteRepository(engine)
    users_repository = SqlUserRepository(engine)
    notes_queue = NotesQueue(sqs_client, queue_url)
    error_handler = DefaultErrorHandler()
    users_controller = UsersControllerImpl(
        users_repository,
        users_repository,
        users_repository,
        users_repository,
        error_handler,
    )
    notes_controller = NotesControllerImpl(
        CreateNoteUseCase(notes_repository, notes_queue),
        notes_repository,
        notes_repository,
        notes_repository,
        error_handler,
    )
    return HttpServer(users_controller, notes_controller)