"""
Reading Stats Service: Application layer orchestrator.

Reads the current snapshots from the state store and runs them through the
aggregator. Holds no state of its own; every property is recomputed on access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from readlog.application.clock import Clock
from readlog.domain.models import Book, DailyStat, Goal, Note

from .aggregator import ChallengeProgress, StatsAggregator

if TYPE_CHECKING:
    from readlog.application.state_store import StateStore


class ReadingStatsService:
    """
    Application service for derived reading statistics.

    Depends on the StateStore snapshot and an injected Clock so that
    "today" is controllable.
    """

    def __init__(
        self,
        store: StateStore,
        clock: Clock | None = None,
        aggregator: StatsAggregator | None = None,
    ):
        """
        Args:
            store: The state store to read snapshots from.
            clock: Resolves "today"; system time if not provided.
            aggregator: Optional custom aggregator; uses default if not provided.
        """
        self._store = store
        self._clock = clock or Clock()
        self._agg = aggregator or StatsAggregator()

    @property
    def weekly_stats(self) -> list[DailyStat]:
        return self._store.weekly_stats.value

    @property
    def total_pages_read(self) -> int:
        return self._agg.total_pages_read(self._store.books.value)

    @property
    def reading_streak(self) -> int:
        return self._agg.reading_streak(self.weekly_stats, self._clock.today_index())

    def finished_books(self) -> list[Book]:
        return self._agg.finished_books(self._store.books.value)

    def reading_list(self) -> list[Book]:
        return self._agg.reading_list(self._store.books.value)

    def wishlist(self) -> list[Book]:
        return self._agg.wishlist(self._store.books.value)

    def active_goals(self) -> list[Goal]:
        return self._agg.active_goals(self._store.goals.value)

    def completed_goals(self) -> list[Goal]:
        return self._agg.completed_goals(self._store.goals.value)

    def notes_for_book(self, book_id: str) -> list[Note]:
        return self._agg.notes_for_book(self._store.notes.value, book_id)

    def challenge_progress(self, year: int | None = None) -> ChallengeProgress | None:
        """
        Progress towards the yearly challenge.

        Args:
            year: Challenge year; defaults to the clock's current year.
        """
        return self._agg.challenge_progress(
            self._store.books.value,
            self._store.yearly_challenges.value,
            year if year is not None else self._clock.now().year,
        )
