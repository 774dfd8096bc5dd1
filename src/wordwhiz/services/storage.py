"""Local key-value storage used by the learning and quiz stores."""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wordwhiz.errors import StorageAccessFailed
from wordwhiz.models.models import KeyValueEntry
from wordwhiz import monitoring

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Asynchronous string key-value store."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete key if present."""


class SqlKeyValueStore(KeyValueStore):
    """Key-value store persisted in a SQLAlchemy table.

    The methods are async to fit the KeyValueStore interface, but the session
    calls inside them are synchronous and block the event loop while they run.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize the store with a session factory."""
        self.session_factory = session_factory

    async def get(self, key: str) -> Optional[str]:
        try:
            with self.session_factory() as db:
                entry = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise StorageAccessFailed(f"Could not read {key}: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            with self.session_factory() as db:
                entry = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
                if entry:
                    entry.value = value
                else:
                    db.add(KeyValueEntry(key=key, value=value))
                db.commit()
        except SQLAlchemyError as e:
            raise StorageAccessFailed(f"Could not write {key}: {e}") from e

    async def remove(self, key: str) -> None:
        try:
            with self.session_factory() as db:
                db.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
                db.commit()
        except SQLAlchemyError as e:
            raise StorageAccessFailed(f"Could not remove {key}: {e}") from e


class JsonStore:
    """Base for services keeping JSON documents in a KeyValueStore.

    Storage failures are logged and degrade to defaults: reads return the
    given default and writes are dropped. Every call goes back to storage,
    nothing is cached between operations.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def _read_json(self, key: str, default: Any) -> Any:
        try:
            raw = await self.store.get(key)
        except StorageAccessFailed as e:
            logger.error(f"Error reading {key}: {e}")
            monitoring.storage_errors.labels(operation="read").inc()
            return default
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.error(f"Discarding undecodable value under {key}: {e}")
            return default

    async def _read_text(self, key: str) -> Optional[str]:
        try:
            return await self.store.get(key)
        except StorageAccessFailed as e:
            logger.error(f"Error reading {key}: {e}")
            monitoring.storage_errors.labels(operation="read").inc()
            return None

    async def _write_text(self, key: str, value: str) -> bool:
        try:
            await self.store.set(key, value)
            return True
        except StorageAccessFailed as e:
            logger.error(f"Error writing {key}: {e}")
            monitoring.storage_errors.labels(operation="write").inc()
            return False

    async def _write_json(self, key: str, value: Any) -> bool:
        return await self._write_text(key, json.dumps(value, sort_keys=True))

    async def _remove(self, key: str) -> bool:
        try:
            await self.store.remove(key)
            return True
        except StorageAccessFailed as e:
            logger.error(f"Error removing {key}: {e}")
            monitoring.storage_errors.labels(operation="remove").inc()
            return False
