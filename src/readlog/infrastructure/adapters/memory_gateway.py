"""
In-memory record gateway.

Dict-backed, one dict per entity kind, insertion ordered. Used for tests and
for throwaway sessions (``backend = "memory"``).
"""

from readlog.domain.models import EntityKind, Record

from .base import ObservableGateway


class InMemoryRecordGateway(ObservableGateway):
    def __init__(self, initial: list[Record] | None = None):
        super().__init__()
        self._tables: dict[EntityKind, dict[str | int, Record]] = {kind: {} for kind in EntityKind}
        self._write_batch(list(initial or []))

    def _read_all(self, kind: EntityKind) -> list[Record]:
        return list(self._tables[kind].values())

    def _write_batch(self, records: list[Record]) -> None:
        # Build the new tables aside and swap them in together.
        staged: dict[EntityKind, dict[str | int, Record]] = {}
        for record in records:
            kind = EntityKind.for_record(record)
            table = staged.setdefault(kind, dict(self._tables[kind]))
            table[kind.key_of(record)] = record
        self._tables.update(staged)

    def _remove(self, kind: EntityKind, key: str | int) -> None:
        self._tables[kind].pop(key, None)
