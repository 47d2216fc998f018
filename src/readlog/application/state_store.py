"""
State store: the authoritative in-memory snapshot of every collection.

Each collection is a ``StateFlow`` fed by the gateway. Values are replaced
wholesale on every gateway emission; nothing here is written optimistically.
"""

import logging

from readlog.application.reactive import StateFlow
from readlog.application.stats.aggregator import StatsAggregator, empty_week
from readlog.domain.models import (
    AppRating,
    AppSettings,
    Book,
    DailyStat,
    EntityKind,
    Goal,
    Note,
    YearlyChallenge,
)
from readlog.domain.ports import RecordGateway, Subscription

logger = logging.getLogger(__name__)


def _first_or_none(rows: list) -> object | None:
    return rows[0] if rows else None


class StateStore:
    """
    Holds one observable per entity kind.

    Gateway subscriptions are opened lazily and shared between observers.
    ``start`` pins every flow with an internal observer so that
    ``flow.value`` stays current for the mutation engine; ``close`` releases
    those pins.
    """

    def __init__(self, gateway: RecordGateway, aggregator: StatsAggregator | None = None):
        self._gateway = gateway
        self._aggregator = aggregator or StatsAggregator()
        self._pins: list[Subscription] = []

        self.books: StateFlow[list[Book]] = self._collection(EntityKind.BOOK, [])
        self.goals: StateFlow[list[Goal]] = self._collection(EntityKind.GOAL, [])
        self.notes: StateFlow[list[Note]] = self._collection(EntityKind.NOTE, [])
        self.daily_stats: StateFlow[list[DailyStat]] = self._collection(
            EntityKind.DAILY_STAT, []
        )
        self.yearly_challenges: StateFlow[list[YearlyChallenge]] = self._collection(
            EntityKind.YEARLY_CHALLENGE, []
        )
        self.app_rating: StateFlow[AppRating | None] = self._singleton(EntityKind.APP_RATING)
        self.app_settings: StateFlow[AppSettings | None] = self._singleton(
            EntityKind.APP_SETTINGS
        )

        # Derived from daily_stats rather than from the gateway directly, so
        # both flows share one storage subscription.
        self.weekly_stats: StateFlow[list[DailyStat]] = StateFlow(
            "weekly_stats",
            empty_week(),
            lambda emit: self.daily_stats.subscribe(
                lambda rows: emit(self._aggregator.weekly_stats(rows))
            ),
        )

    def _collection(self, kind: EntityKind, default: list) -> StateFlow:
        return StateFlow(
            kind.table,
            default,
            lambda emit: self._gateway.observe_all(kind, lambda rows: emit(list(rows))),
        )

    def _singleton(self, kind: EntityKind) -> StateFlow:
        return StateFlow(
            kind.table,
            None,
            lambda emit: self._gateway.observe_all(kind, lambda rows: emit(_first_or_none(rows))),
        )

    def flows(self) -> list[StateFlow]:
        return [
            self.books,
            self.goals,
            self.notes,
            self.daily_stats,
            self.weekly_stats,
            self.yearly_challenges,
            self.app_rating,
            self.app_settings,
        ]

    @property
    def is_started(self) -> bool:
        return bool(self._pins)

    def start(self) -> None:
        if self._pins:
            return
        logger.debug("Starting state store")
        self._pins = [flow.subscribe(lambda _value: None) for flow in self.flows()]

    def close(self) -> None:
        pins, self._pins = self._pins, []
        for pin in pins:
            pin.close()
        logger.debug("State store closed")

    def find_book(self, book_id: str) -> Book | None:
        return next((b for b in self.books.value if b.id == book_id), None)

    def find_goal(self, goal_id: str) -> Goal | None:
        return next((g for g in self.goals.value if g.id == goal_id), None)

    def pages_on(self, day: str) -> int:
        """Current page total for ``day``, 0 if there is no record yet."""
        record = next((s for s in self.daily_stats.value if s.day == day), None)
        return record.pages if record else 0
