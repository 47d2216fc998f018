"""
Reading Tracker: the surface the presentation layer talks to.

Wires the state store, mutation engine and stats service around one gateway
with an explicit lifecycle. Create one per process; there is no global
instance.
"""

import logging

from readlog.application.clock import Clock
from readlog.application.mutations import MutationEngine
from readlog.application.state_store import StateStore
from readlog.application.stats import ReadingStatsService, StatsAggregator
from readlog.domain.ports import RecordGateway

logger = logging.getLogger(__name__)


class ReadingTracker:
    """
    Facade over the reading engine.

    Observables: ``books``, ``goals``, ``notes``, ``weekly_stats``,
    ``app_rating``, ``app_settings``, ``yearly_challenges``.
    Derived scalars: ``total_pages_read``, ``reading_streak``.
    Mutations are delegated to the MutationEngine.

    Usage:
        async with ReadingTracker(gateway) as tracker:
            await tracker.add_book("Dune", "Frank Herbert", 412)
    """

    def __init__(
        self,
        gateway: RecordGateway,
        clock: Clock | None = None,
        engine: MutationEngine | None = None,
        close_gateway: bool = False,
    ):
        self.gateway = gateway
        self.clock = clock or Clock()
        aggregator = StatsAggregator()
        self.store = StateStore(gateway, aggregator)
        self.engine = engine or MutationEngine(gateway, self.store, self.clock)
        self.stats = ReadingStatsService(self.store, self.clock, aggregator)
        self._close_gateway = close_gateway

    # ---------- Lifecycle ----------

    def start(self) -> "ReadingTracker":
        self.store.start()
        logger.debug("Reading tracker started")
        return self

    def close(self) -> None:
        self.store.close()
        if self._close_gateway:
            self.gateway.close()
        logger.debug("Reading tracker closed")

    async def __aenter__(self) -> "ReadingTracker":
        return self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---------- Observables ----------

    @property
    def books(self):
        return self.store.books

    @property
    def goals(self):
        return self.store.goals

    @property
    def notes(self):
        return self.store.notes

    @property
    def weekly_stats(self):
        return self.store.weekly_stats

    @property
    def app_rating(self):
        return self.store.app_rating

    @property
    def app_settings(self):
        return self.store.app_settings

    @property
    def yearly_challenges(self):
        return self.store.yearly_challenges

    # ---------- Derived scalars ----------

    @property
    def total_pages_read(self) -> int:
        return self.stats.total_pages_read

    @property
    def reading_streak(self) -> int:
        return self.stats.reading_streak

    # ---------- Mutations ----------

    async def add_book(self, title: str, author: str, total_pages: int, is_wishlist: bool = False):
        await self.engine.add_book(title, author, total_pages, is_wishlist)

    async def update_read_pages(self, book_id: str, read_pages: int):
        await self.engine.update_read_pages(book_id, read_pages)

    async def finish_book(self, book_id: str, rating: int, review: str):
        await self.engine.finish_book(book_id, rating, review)

    async def delete_book(self, book_id: str):
        await self.engine.delete_book(book_id)

    async def add_goal(self, description: str):
        await self.engine.add_goal(description)

    async def toggle_goal(self, goal_id: str):
        await self.engine.toggle_goal(goal_id)

    async def delete_goal(self, goal_id: str):
        await self.engine.delete_goal(goal_id)

    async def add_note(self, book_id: str, content: str):
        await self.engine.add_note(book_id, content)

    async def delete_note(self, note_id: str):
        await self.engine.delete_note(note_id)

    async def save_app_rating(self, rating: int, feedback: str):
        await self.engine.save_app_rating(rating, feedback)

    async def set_yearly_challenge(self, year: int, goal: int):
        await self.engine.set_yearly_challenge(year, goal)

    async def save_app_settings(self, theme_id: int):
        await self.engine.save_app_settings(theme_id)
