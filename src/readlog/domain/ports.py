"""
Ports (interfaces) for durable record storage.

These define the contract that infrastructure adapters must implement.
The state store and mutation engine depend on this abstraction, not on
concrete storage.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .models import EntityKind, Record

SnapshotCallback = Callable[[list[Any]], None]


class Subscription(ABC):
    """Handle returned by ``observe``-style calls. ``close`` detaches it."""

    @abstractmethod
    def close(self) -> None:
        pass


class RecordGateway(ABC):
    """
    Port for persisting reading records.

    Implementations:
        - InMemoryRecordGateway: Dict-backed, used for tests and ephemeral runs.
        - SqliteRecordGateway: One SQLite table per entity kind.
    """

    @abstractmethod
    def observe_all(self, kind: EntityKind, callback: SnapshotCallback) -> Subscription:
        """
        Subscribe to the full collection of ``kind``.

        The callback receives the current collection immediately and then the
        whole collection again after every change (replace-all, not deltas).
        The first delivery happens before this returns, so subscribers never
        observe an unloaded collection.
        """
        pass

    @abstractmethod
    async def upsert(self, kind: EntityKind, record: Record) -> None:
        """
        Insert or replace ``record`` keyed by its identifier.

        Raises:
            StorageError: If the backend write fails.
        """
        pass

    @abstractmethod
    async def upsert_many(self, records: list[Record]) -> None:
        """
        Insert or replace several records, possibly of different kinds, as
        one unit: either every record is stored or none is.

        Raises:
            StorageError: If the backend write fails.
        """
        pass

    @abstractmethod
    async def delete(self, kind: EntityKind, key: str | int) -> None:
        """
        Remove the record with ``key``. No-op if absent.

        Raises:
            StorageError: If the backend write fails.
        """
        pass

    def close(self) -> None:  # noqa: B027
        """Release backend resources. Default is a no-op."""


class CallbackSubscription(Subscription):
    """Subscription that runs ``on_close`` exactly once."""

    def __init__(self, on_close: Callable[[], None]):
        self._on_close = on_close
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._on_close()
