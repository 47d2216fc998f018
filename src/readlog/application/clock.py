"""Current-date resolution, injectable so callers can pin "today"."""

from collections.abc import Callable
from datetime import date, datetime

from readlog.domain.constants import WEEK_DAYS


def day_key(day: date) -> str:
    """Map a calendar date onto the Mon..Sun cycle."""
    return WEEK_DAYS[day.weekday()]


class Clock:
    """
    Source of the current time.

    Every call reads ``now_fn`` again; nothing is cached, so a process that
    runs past midnight accrues pages to the new day.
    """

    def __init__(self, now_fn: Callable[[], datetime] | None = None):
        self._now_fn = now_fn or datetime.now

    def now(self) -> datetime:
        return self._now_fn()

    def now_ms(self) -> int:
        return int(self.now().timestamp() * 1000)

    def today_index(self) -> int:
        return self.now().weekday()

    def today_key(self) -> str:
        return day_key(self.now())
