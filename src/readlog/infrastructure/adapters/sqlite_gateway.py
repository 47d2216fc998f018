"""
SQLite Record Gateway: Infrastructure adapter for durable storage.

Implements RecordGateway on SQLAlchemy Core with one table per entity kind
(see ``sqlite_tables``). Writes are upserts keyed on the record key, so a
replaced row keeps its position. Blocking calls run in a worker thread.
"""

import asyncio
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import Connection, Engine, create_engine, delete, literal_column, select
from sqlalchemy.dialects.sqlite import Insert, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from readlog.domain.errors import StorageError
from readlog.domain.models import EntityKind, Record

from .base import ObservableGateway
from .sqlite_tables import TABLES, metadata

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


def upsert_statement(kind: EntityKind, record: Record) -> Insert:
    table = TABLES[kind]
    stmt = insert(table).values({c.name: getattr(record, c.name) for c in table.columns})
    return stmt.on_conflict_do_update(
        index_elements=[table.c[kind.key_field]],
        set_={c.name: stmt.excluded[c.name] for c in table.columns if c.name != kind.key_field},
    )


def row_to_record(kind: EntityKind, row) -> Record:
    return kind.record_type(**row._mapping)


def create_sqlite_engine(db_path: Path | str) -> Engine:
    connect_args = {"check_same_thread": False}
    if str(db_path) == MEMORY_DB:
        # One shared connection, otherwise every checkout sees a new empty database.
        return create_engine("sqlite://", connect_args=connect_args, poolclass=StaticPool)
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{db_path}", connect_args=connect_args)


class SqliteRecordGateway(ObservableGateway):
    """
    Persists records to a local SQLite database.

    Args:
        db_path: Database file, created with its parent directory if missing.
            ``":memory:"`` keeps everything in process memory.
    """

    def __init__(self, db_path: Path | str):
        super().__init__()
        self.db_path = db_path
        self._lock = threading.Lock()
        self._engine = self._open()

    def _open(self) -> Engine:
        try:
            engine = create_sqlite_engine(self.db_path)
            metadata.create_all(engine)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Could not open database {self.db_path}: {e}") from e

        logger.debug(f"Opened database {self.db_path}")
        return engine

    @contextmanager
    def _transaction(self) -> Iterator[Connection]:
        with self._lock:
            try:
                with self._engine.begin() as conn:
                    yield conn
            except SQLAlchemyError as e:
                raise StorageError(f"Database error: {e}") from e

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        return await asyncio.to_thread(fn, *args)

    def _read_all(self, kind: EntityKind) -> list[Record]:
        query = select(TABLES[kind]).order_by(literal_column("rowid"))
        with self._transaction() as conn:
            rows = conn.execute(query).all()
        return [row_to_record(kind, row) for row in rows]

    def _write_batch(self, records: list[Record]) -> None:
        with self._transaction() as conn:
            for record in records:
                conn.execute(upsert_statement(EntityKind.for_record(record), record))

    def _remove(self, kind: EntityKind, key: str | int) -> None:
        table = TABLES[kind]
        with self._transaction() as conn:
            conn.execute(delete(table).where(table.c[kind.key_field] == key))

    def close(self) -> None:
        with self._lock:
            self._engine.dispose()
        logger.debug(f"Closed database {self.db_path}")
