"""
Statistics aggregator for deriving reading insights from raw records.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from readlog.domain.constants import WEEK_DAYS
from readlog.domain.models import Book, DailyStat, Goal, Note, YearlyChallenge


def empty_week() -> list[DailyStat]:
    """Seven zero-page buckets in Mon..Sun order."""
    return [DailyStat(day, 0) for day in WEEK_DAYS]


@dataclass(frozen=True)
class ChallengeProgress:
    """Books finished in a year measured against that year's target."""

    year: int
    goal: int
    finished: int

    @property
    def fraction(self) -> float:
        if self.goal <= 0:
            return 0.0
        return min(self.finished / self.goal, 1.0)


class StatsAggregator:
    """
    Computes derived statistics from snapshots of the state store.

    Stateless and side-effect free.
    """

    def weekly_stats(self, records: Iterable[DailyStat]) -> list[DailyStat]:
        """
        Bucket raw daily records into the fixed weekly cycle.

        Always returns exactly seven entries in Mon..Sun order. Days without a
        record report 0 pages; records with unknown day keys are ignored.
        If storage ever holds duplicates for a day, the first one wins.
        """
        by_day: dict[str, int] = {}
        for record in records:
            by_day.setdefault(record.day, record.pages)
        return [DailyStat(day, by_day.get(day, 0)) for day in WEEK_DAYS]

    def total_pages_read(self, books: Iterable[Book]) -> int:
        """Sum of read pages across finished and unfinished books."""
        return sum(book.read_pages for book in books)

    def reading_streak(self, weekly: list[DailyStat], today_index: int) -> int:
        """
        Count consecutive reading days ending today.

        Walks backwards from ``today_index`` (0 == Mon) and stops at the first
        day with zero pages or at the start of the cycle.
        """
        streak = 0
        for i in range(today_index, -1, -1):
            if weekly[i].pages > 0:
                streak += 1
            else:
                break
        return streak

    def finished_books(self, books: Iterable[Book]) -> list[Book]:
        """Finished books, best rated first."""
        finished = [b for b in books if b.is_finished]
        return sorted(finished, key=lambda b: b.rating or 0, reverse=True)

    def reading_list(self, books: Iterable[Book]) -> list[Book]:
        return [b for b in books if not b.is_finished and not b.is_wishlist]

    def wishlist(self, books: Iterable[Book]) -> list[Book]:
        return [b for b in books if b.is_wishlist and not b.is_finished]

    def active_goals(self, goals: Iterable[Goal]) -> list[Goal]:
        return [g for g in goals if not g.is_completed]

    def completed_goals(self, goals: Iterable[Goal]) -> list[Goal]:
        return [g for g in goals if g.is_completed]

    def notes_for_book(self, notes: Iterable[Note], book_id: str) -> list[Note]:
        """Notes attached to ``book_id``, newest first."""
        matching = [n for n in notes if n.book_id == book_id]
        return sorted(matching, key=lambda n: n.date, reverse=True)

    def challenge_progress(
        self,
        books: Iterable[Book],
        challenges: Iterable[YearlyChallenge],
        year: int,
    ) -> ChallengeProgress | None:
        """
        Progress towards the reading challenge for ``year``.

        Returns None when no challenge has been set for that year.
        """
        challenge = next((c for c in challenges if c.year == year), None)
        if challenge is None:
            return None

        finished = 0
        for book in books:
            if not book.is_finished or book.finished_date is None:
                continue
            if datetime.fromtimestamp(book.finished_date / 1000).year == year:
                finished += 1

        return ChallengeProgress(year=year, goal=challenge.goal, finished=finished)
