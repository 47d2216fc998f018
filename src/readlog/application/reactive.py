"""
Push-based observable state.

A ``StateFlow`` always has a value. Subscribers receive the current value
on subscribe and every distinct value after that. All subscribers share a
single upstream connection which is opened for the first subscriber and
closed when the last one detaches.
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from readlog.domain.ports import CallbackSubscription, Subscription

logger = logging.getLogger(__name__)

T = TypeVar("T")

Emit = Callable[[T], None]
Connect = Callable[[Emit], Subscription]


class StateFlow(Generic[T]):
    """
    Hot observable holding the latest value of one collection.

    Args:
        name: Label used in log messages.
        default: Value reported until the upstream emits for the first time.
        connect: Opens the upstream. Receives an emit function and returns
            the upstream subscription.
    """

    def __init__(self, name: str, default: T, connect: Connect):
        self.name = name
        self._value: T = default
        self._connect = connect
        self._subscribers: list[Callable[[T], None]] = []
        self._upstream: Subscription | None = None

    @property
    def value(self) -> T:
        """Last emitted snapshot. Never blocks."""
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def is_connected(self) -> bool:
        return self._upstream is not None

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        callback(self._value)
        self._subscribers.append(callback)

        if self._upstream is None:
            logger.debug(f"Connecting upstream for '{self.name}'")
            self._upstream = self._connect(self._emit)

        return CallbackSubscription(lambda: self._unsubscribe(callback))

    def _unsubscribe(self, callback: Callable[[T], None]) -> None:
        self._subscribers.remove(callback)
        if not self._subscribers and self._upstream is not None:
            logger.debug(f"Last subscriber left '{self.name}', closing upstream")
            upstream, self._upstream = self._upstream, None
            upstream.close()

    def _emit(self, value: T) -> None:
        # Equal values are conflated, like a StateFlow.
        if value == self._value:
            return
        self._value = value
        for callback in list(self._subscribers):
            callback(value)
