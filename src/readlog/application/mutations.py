"""
Mutation engine: one operation per user-visible action.

Every operation reads the current snapshot from the state store, computes the
new record(s) and writes them through the gateway. Results are observed via
the state store, never returned. Operations are serialized so no two
read-modify-write sequences interleave.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace

from readlog.application.clock import Clock
from readlog.application.id_service import generate_record_id
from readlog.application.state_store import StateStore
from readlog.domain.constants import (
    DEFAULT_THEME_ID,
    MAX_RATING,
    MIN_RATING,
    THEMES,
)
from readlog.domain.errors import StorageError
from readlog.domain.models import (
    AppRating,
    AppSettings,
    Book,
    DailyStat,
    EntityKind,
    Goal,
    Note,
    Record,
    YearlyChallenge,
)
from readlog.domain.ports import RecordGateway

logger = logging.getLogger(__name__)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def clamp_rating(rating: int) -> int:
    return clamp(rating, MIN_RATING, MAX_RATING)


class MutationEngine:
    """
    Applies validated mutations to reading records.

    Inputs are assumed to be pre-validated primitives; only numeric ranges
    are enforced here, by clamping. Unknown identifiers make an operation a
    no-op. Storage failures propagate as ``StorageError``.
    """

    def __init__(
        self,
        gateway: RecordGateway,
        store: StateStore,
        clock: Clock | None = None,
        id_factory: Callable[[], str] = generate_record_id,
    ):
        self._gateway = gateway
        self._store = store
        self._clock = clock or Clock()
        self._new_id = id_factory
        self._lock = asyncio.Lock()

    async def _upsert(self, record: Record) -> None:
        kind = EntityKind.for_record(record)
        try:
            await self._gateway.upsert(kind, record)
        except StorageError as e:
            logger.error(f"Failed to write {kind.table} {kind.key_of(record)}: {e}")
            raise

    async def _upsert_many(self, records: list[Record]) -> None:
        try:
            await self._gateway.upsert_many(records)
        except StorageError as e:
            tables = ", ".join(EntityKind.for_record(r).table for r in records)
            logger.error(f"Failed to write {tables}: {e}")
            raise

    async def _delete(self, kind: EntityKind, key: str | int) -> None:
        try:
            await self._gateway.delete(kind, key)
        except StorageError as e:
            logger.error(f"Failed to delete {kind.table} {key}: {e}")
            raise

    # ---------- Books ----------

    async def add_book(
        self, title: str, author: str, total_pages: int, is_wishlist: bool = False
    ) -> None:
        book = Book(
            id=self._new_id(),
            title=title,
            author=author,
            total_pages=max(total_pages, 0),
            is_wishlist=is_wishlist,
        )
        async with self._lock:
            await self._upsert(book)
        logger.info(f"Added book '{title}' ({book.id})")

    async def update_read_pages(self, book_id: str, read_pages: int) -> None:
        """
        Record reading progress for a book.

        The new value is clamped to [0, total_pages]. Forward progress is
        added to today's daily counter; going backwards never retracts pages
        already counted for the day. The book and the counter are written
        together, so a failed write changes neither. Finished books are left
        alone.
        """
        async with self._lock:
            book = self._store.find_book(book_id)
            if book is None:
                logger.debug(f"update_read_pages: no book {book_id}, ignoring")
                return
            if book.is_finished:
                logger.debug(f"update_read_pages: book {book_id} is finished, ignoring")
                return

            new_pages = clamp(read_pages, 0, book.total_pages)
            records: list[Record] = [replace(book, read_pages=new_pages)]
            delta = new_pages - book.read_pages
            if delta > 0:
                today = self._clock.today_key()
                current = self._store.pages_on(today)
                records.append(DailyStat(today, current + delta))
                logger.debug(f"Adding {delta} pages to {today} (was {current})")

            await self._upsert_many(records)
        logger.info(f"Book {book_id} at {new_pages}/{book.total_pages} pages")

    async def finish_book(self, book_id: str, rating: int, review: str) -> None:
        """Mark a book finished. Calling again overwrites the finish fields."""
        async with self._lock:
            book = self._store.find_book(book_id)
            if book is None:
                logger.debug(f"finish_book: no book {book_id}, ignoring")
                return

            finished = replace(
                book,
                is_finished=True,
                rating=clamp_rating(rating),
                review=review,
                finished_date=self._clock.now_ms(),
                read_pages=book.total_pages,
            )
            await self._upsert(finished)
        logger.info(f"Finished book {book_id} with rating {finished.rating}")

    async def delete_book(self, book_id: str) -> None:
        # Notes pointing at this book are intentionally kept.
        async with self._lock:
            await self._delete(EntityKind.BOOK, book_id)
        logger.info(f"Deleted book {book_id}")

    # ---------- Goals ----------

    async def add_goal(self, description: str) -> None:
        goal = Goal(id=self._new_id(), description=description)
        async with self._lock:
            await self._upsert(goal)
        logger.info(f"Added goal {goal.id}")

    async def toggle_goal(self, goal_id: str) -> None:
        async with self._lock:
            goal = self._store.find_goal(goal_id)
            if goal is None:
                logger.debug(f"toggle_goal: no goal {goal_id}, ignoring")
                return

            completed = not goal.is_completed
            await self._upsert(
                replace(
                    goal,
                    is_completed=completed,
                    completion_date=self._clock.now_ms() if completed else None,
                )
            )
        logger.info(f"Goal {goal_id} completed={completed}")

    async def delete_goal(self, goal_id: str) -> None:
        async with self._lock:
            await self._delete(EntityKind.GOAL, goal_id)
        logger.info(f"Deleted goal {goal_id}")

    # ---------- Notes ----------

    async def add_note(self, book_id: str, content: str) -> None:
        note = Note(
            id=self._new_id(),
            book_id=book_id,
            content=content,
            date=self._clock.now_ms(),
        )
        async with self._lock:
            await self._upsert(note)
        logger.info(f"Added note {note.id} for book {book_id}")

    async def delete_note(self, note_id: str) -> None:
        async with self._lock:
            await self._delete(EntityKind.NOTE, note_id)
        logger.info(f"Deleted note {note_id}")

    # ---------- Singletons & challenges ----------

    async def save_app_rating(self, rating: int, feedback: str) -> None:
        app_rating = AppRating(
            rating=clamp_rating(rating),
            feedback=feedback,
            date=self._clock.now_ms(),
        )
        async with self._lock:
            await self._upsert(app_rating)
        logger.info(f"Saved app rating {app_rating.rating}/10")

    async def set_yearly_challenge(self, year: int, goal: int) -> None:
        async with self._lock:
            await self._upsert(YearlyChallenge(year=year, goal=max(goal, 0)))
        logger.info(f"Yearly challenge for {year} set to {goal}")

    async def save_app_settings(self, theme_id: int) -> None:
        if theme_id not in THEMES:
            logger.warning(f"Unknown theme {theme_id}, using default")
            theme_id = DEFAULT_THEME_ID
        async with self._lock:
            await self._upsert(AppSettings(theme_id=theme_id))
        logger.info(f"Theme set to {THEMES[theme_id]}")
