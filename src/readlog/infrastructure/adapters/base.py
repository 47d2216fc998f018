"""
Shared listener bookkeeping for gateways.

Subclasses provide the storage primitives; this class turns every successful
write into a fresh full-collection snapshot for the observers of that kind.
"""

import logging
from abc import abstractmethod
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from readlog.domain.errors import StorageError
from readlog.domain.models import EntityKind, Record
from readlog.domain.ports import (
    CallbackSubscription,
    RecordGateway,
    SnapshotCallback,
    Subscription,
)

logger = logging.getLogger(__name__)


class ObservableGateway(RecordGateway):
    def __init__(self):
        self._listeners: dict[EntityKind, list[SnapshotCallback]] = defaultdict(list)

    # ---------- Storage primitives ----------

    @abstractmethod
    def _read_all(self, kind: EntityKind) -> list[Record]:
        pass

    @abstractmethod
    def _write_batch(self, records: list[Record]) -> None:
        """Store every record or none of them."""
        pass

    @abstractmethod
    def _remove(self, kind: EntityKind, key: str | int) -> None:
        pass

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        """Execute a storage primitive. Override to move blocking I/O off the loop."""
        return fn(*args)

    # ---------- RecordGateway ----------

    def observe_all(self, kind: EntityKind, callback: SnapshotCallback) -> Subscription:
        # subscribe() hands over the current collection before it returns,
        # so this first read cannot be awaited.
        self._listeners[kind].append(callback)
        logger.debug(f"Observer attached to {kind.table} ({len(self._listeners[kind])} total)")
        callback(self._read_all(kind))
        return CallbackSubscription(lambda: self._detach(kind, callback))

    def listener_count(self, kind: EntityKind) -> int:
        return len(self._listeners[kind])

    def _detach(self, kind: EntityKind, callback: SnapshotCallback) -> None:
        self._listeners[kind].remove(callback)
        logger.debug(f"Observer detached from {kind.table}")

    async def upsert(self, kind: EntityKind, record: Record) -> None:
        await self.upsert_many([record])

    async def upsert_many(self, records: list[Record]) -> None:
        if not records:
            return
        await self._run(self._write_batch, records)
        for kind in dict.fromkeys(EntityKind.for_record(r) for r in records):
            await self._publish(kind)

    async def delete(self, kind: EntityKind, key: str | int) -> None:
        await self._run(self._remove, kind, key)
        await self._publish(kind)

    async def _publish(self, kind: EntityKind) -> None:
        """
        Push the committed collection to observers of ``kind``.

        The write has already succeeded when this runs. A failed re-read is
        logged and observers keep their previous snapshot until the next
        successful publish; the caller's write is not reported as failed.
        """
        listeners = list(self._listeners[kind])
        if not listeners:
            return
        try:
            snapshot = await self._run(self._read_all, kind)
        except StorageError as e:
            logger.error(f"Write to {kind.table} committed but refresh failed: {e}")
            return
        for callback in listeners:
            callback(list(snapshot))
