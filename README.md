# notesapi

A small JSON HTTP API that manages users and the notes they own.
Users and notes are stored through SQLAlchemy, and every newly created
note is published as a JSON message to a queue.

## Endpoints

All routes live under `/v1` and answer with `application/json`.

| Method | Path                              | Success status |
|--------|-----------------------------------|----------------|
| GET    | `/v1/users`                       | 200            |
| GET    | `/v1/users/<id>`                  | 200            |
| POST   | `/v1/users`                       | 201            |
| DELETE | `/v1/users/<id>`                  | 204            |
| GET    | `/v1/users/<id>/notes`            | 200            |
| GET    | `/v1/users/<id>/notes/<note_id>`  | 200            |
| POST   | `/v1/users/<id>/notes`            | 201            |
| DELETE | `/v1/users/<id>/notes/<note_id>`  | 204            |

A user is created from `{"name": "..."}`; a note from
`{"title": "...", "content": "..."}`, with the user taken from the path.
Names, titles and contents are required and must be at least three
characters long, and a note may not have the title `brandlovers`.
Deleting a user also deletes that user's notes. Successful deletes answer
with an empty body.

Created users and notes get a random UUID as id (unless one is given) and
`created_at` / `updated_at` timestamps, written in RFC 3339 form.

## Errors

Every failure is answered with a JSON body of this shape:

```json
{"status_code":400,"messages":["'title' is required"],"type":"Validation Error"}
```

The error types are `Validation Error` (400), `Not Found Error` (404),
`Internal Server Error` (500) and `Notes queue error` (500). Any
unexpected exception inside a controller is answered as an
`Internal Server Error` whose message starts with `panic:`.

In Python these errors are `notesapi.exceptions.ErrorType` exceptions,
built by `validation_error`, `not_found_error`, `internal_server_error`
and `notes_queue_error`; `ErrorType.to_json()` gives the body above.

## Using it from Python

`notesapi.wiring.build_server` wires everything together. It takes a
SQLAlchemy engine, a queue client and the URL of the queue that receives
created notes, and returns a `notesapi.server.HttpServer`. It does not
create the tables; do that with `notesapi.models.Base.metadata`:

```python
from sqlalchemy import create_engine

from notesapi.models import Base
from notesapi.queues import SqsClient
from notesapi.wiring import build_server


class PrintingQueue(SqsClient):
    def send_message(self, message_body, queue_url):
        print(queue_url, message_body)


engine = create_engine("sqlite:///notes.db")
Base.metadata.create_all(engine)
server = build_server(engine, PrintingQueue(), "local-notes-queue")
server.serve()
```

`HttpServer.serve` runs the Flask development server on the port given
by the `SERVER_PORT` environment variable (any free port when it is
unset). `HttpServer.app` is the Flask application itself.

To embed the routes in your own setup, `notesapi.server.create_app`
builds the Flask application from a users controller and a notes
controller (`notesapi.controllers.UsersControllerImpl` and
`notesapi.controllers.NotesControllerImpl`).

Creating a note for a user that does not exist answers 404 only when the
database enforces the foreign key (with SQLite, foreign keys must be
switched on for the connection).

## Building blocks

- `notesapi.entities`: the `Note` and `User` domain objects.
- `notesapi.usecases.CreateNoteUseCase`: stores a note, then publishes it.
- `notesapi.dtos`: `NoteDTO` and `UserDTO`, the JSON request and response
  shapes.
- `notesapi.validation.validate`: checks a request object and raises a
  validation error listing every failing field.
- `notesapi.error_handler.DefaultErrorHandler`: turns exceptions into a
  JSON body and a status code.
- `notesapi.queues.NotesQueue`: publishes notes as JSON through an
  `SqsClient`.
- `notesapi.models`: the `users` and `notes` tables (`UserModel`,
  `NoteModel`).
- `notesapi.repositories`: `SqlNoteRepository` and `SqlUserRepository`.
- `notesapi.secrets.SecretsManagerSecret`: reads a secret string through a
  `SecretClient`.
- `notesapi.ports`: the protocols these pieces depend on.

## What it does not do

- There is no command to start the server; call `build_server(...).serve()`
  from your own code.
- It ships no queue or secrets-manager client; you pass in an object with
  `send_message(message_body, queue_url)` or
  `get_secret_value(secret_id)`.
- It does not set up the database connection itself, from secrets or
  otherwise, and has no cache implementation behind the `Cache` protocol.