"""Secret lookup backed by a secrets-manager client."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class SecretClient(Protocol):
    """The part of a secrets-manager client that reads one secret."""

    def get_secret_value(self, secret_id: str) -> Mapping[str, Any]: ...


class SecretsManagerSecret:
    """Reads secret strings by id."""

    def __init__(self, client: SecretClient) -> None:
        self._client = client

    def get(self, key: str) -> bytes:
        """Return the secret string stored under *key* as UTF-8 bytes."""
        response = self._client.get_secret_value(secret_id=key)
        return response["SecretString"].encode("utf-8")