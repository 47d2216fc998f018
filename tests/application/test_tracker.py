from unittest.mock import MagicMock

import pytest

from readlog.application.clock import Clock, day_key
from readlog.application.tracker import ReadingTracker
from readlog.domain.models import EntityKind
from readlog.infrastructure.adapters.memory_gateway import InMemoryRecordGateway

from tests.conftest import FRIDAY


def test_day_key_maps_weekdays():
    assert day_key(FRIDAY) == "Fri"
    assert Clock(lambda: FRIDAY).today_key() == "Fri"
    assert Clock(lambda: FRIDAY).today_index() == 4


def test_clock_reads_time_on_every_call():
    times = iter([FRIDAY, FRIDAY.replace(day=18)])
    clock = Clock(lambda: next(times))

    assert clock.today_key() == "Fri"
    assert clock.today_key() == "Sun"


@pytest.mark.asyncio
async def test_round_trip_through_the_facade(tracker):
    await tracker.add_book("Emma", "Jane Austen", 400)
    book = tracker.books.value[0]

    await tracker.update_read_pages(book.id, 120)

    assert tracker.total_pages_read == 120
    assert tracker.reading_streak == 1
    assert tracker.weekly_stats.value[4].pages == 120


@pytest.mark.asyncio
async def test_context_manager_starts_and_closes():
    gateway = InMemoryRecordGateway()

    async with ReadingTracker(gateway) as tracker:
        assert tracker.store.is_started
        assert gateway.listener_count(EntityKind.BOOK) == 1

    assert gateway.listener_count(EntityKind.BOOK) == 0


def test_close_gateway_only_when_owned():
    gateway = MagicMock(spec=InMemoryRecordGateway)

    ReadingTracker(gateway).start().close()
    gateway.close.assert_not_called()

    ReadingTracker(gateway, close_gateway=True).start().close()
    gateway.close.assert_called_once()


def test_trackers_do_not_share_state():
    a = ReadingTracker(InMemoryRecordGateway()).start()
    b = ReadingTracker(InMemoryRecordGateway()).start()

    assert a.store is not b.store
    a.close()
    b.close()
