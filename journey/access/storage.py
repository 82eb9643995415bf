"""Scoped client key/value storage backends.

Backends expose get/set of raw strings under a key within one client scope.
A backend that cannot reach its backing store raises StorageUnavailableError;
it never interprets the values it stores.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from journey.access.errors import StorageUnavailableError
from journey.db.models import ClientStorageEntry
from journey.db.session import get_session


class KeyValueStorage(Protocol):
    """Scoped key/value read and write."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStorage:
    """Process-local storage, used for tests and non-persistent sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class SqlKeyValueStorage:
    """Storage persisted in the client_storage table under one scope."""

    def __init__(self, scope: str) -> None:
        self.scope = scope

    def get(self, key: str) -> str | None:
        try:
            with get_session() as session:
                entry = session.execute(
                    select(ClientStorageEntry).where(
                        ClientStorageEntry.scope == self.scope,
                        ClientStorageEntry.key == key,
                    )
                ).scalar_one_or_none()
                return entry.value if entry else None
        except SQLAlchemyError as e:
            logger.warning(f"Client storage read failed: scope={self.scope}, key={key}, error={e}")
            raise StorageUnavailableError(f"Client storage unavailable for scope {self.scope}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with get_session() as session:
                entry = session.execute(
                    select(ClientStorageEntry).where(
                        ClientStorageEntry.scope == self.scope,
                        ClientStorageEntry.key == key,
                    )
                ).scalar_one_or_none()
                if entry is None:
                    session.add(ClientStorageEntry(scope=self.scope, key=key, value=value))
                    logger.debug(f"Client storage entry created: scope={self.scope}, key={key}")
                elif entry.value != value:
                    entry.value = value
                    entry.updated_at = datetime.now(timezone.utc)
                    logger.debug(f"Client storage entry updated: scope={self.scope}, key={key}")
        except SQLAlchemyError as e:
            logger.warning(f"Client storage write failed: scope={self.scope}, key={key}, error={e}")
            raise StorageUnavailableError(f"Client storage unavailable for scope {self.scope}") from e
