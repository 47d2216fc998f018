"""
Domain models for reading activity.

These are pure data structures with no I/O or external dependencies.
Records are immutable; an update means building a new value with
``dataclasses.replace`` and writing it back under the same key.
"""

from dataclasses import dataclass
from enum import Enum

from .constants import APP_RATING_ID, APP_SETTINGS_ID, DEFAULT_THEME_ID


@dataclass(frozen=True)
class Book:
    """
    A book on the user's shelf.

    Attributes:
        id: Stable identifier assigned at creation.
        title: Book title.
        author: Book author.
        total_pages: Page count of the book (>= 0).
        read_pages: Pages read so far. Clamped by the mutation engine, not here.
        is_finished: True once the book has been finished (terminal).
        rating: 0-10, only set when finished.
        review: Free text, only set when finished.
        finished_date: Epoch milliseconds, only set when finished.
        is_wishlist: Book is on the wishlist rather than the reading list.
    """

    id: str
    title: str
    author: str
    total_pages: int
    read_pages: int = 0
    is_finished: bool = False
    rating: int | None = None
    review: str | None = None
    finished_date: int | None = None
    is_wishlist: bool = False

    @property
    def progress(self) -> float:
        """Fraction of the book read; 0.0 when the page count is unknown."""
        if self.total_pages > 0:
            return self.read_pages / self.total_pages
        return 0.0


@dataclass(frozen=True)
class Goal:
    id: str
    description: str
    is_completed: bool = False
    completion_date: int | None = None  # Epoch ms, cleared when un-completed


@dataclass(frozen=True)
class Note:
    """A quote or note attached to a book. ``book_id`` may dangle."""

    id: str
    book_id: str
    content: str
    date: int  # Epoch ms of creation


@dataclass(frozen=True)
class DailyStat:
    """Pages read on one day of the weekly cycle, keyed by ``day`` (Mon..Sun)."""

    day: str
    pages: int = 0


@dataclass(frozen=True)
class AppRating:
    rating: int
    feedback: str
    date: int
    id: int = APP_RATING_ID


@dataclass(frozen=True)
class YearlyChallenge:
    year: int
    goal: int


@dataclass(frozen=True)
class AppSettings:
    theme_id: int = DEFAULT_THEME_ID
    id: int = APP_SETTINGS_ID


Record = Book | Goal | Note | DailyStat | AppRating | YearlyChallenge | AppSettings


class EntityKind(Enum):
    """
    The kinds of records held by the gateway.

    Each member carries its storage name, record type and key field.
    """

    BOOK = ("books", Book, "id")
    GOAL = ("goals", Goal, "id")
    NOTE = ("notes", Note, "id")
    DAILY_STAT = ("daily_stats", DailyStat, "day")
    APP_RATING = ("app_rating", AppRating, "id")
    YEARLY_CHALLENGE = ("yearly_challenge", YearlyChallenge, "year")
    APP_SETTINGS = ("app_settings", AppSettings, "id")

    def __init__(self, table: str, record_type: type, key_field: str):
        self.table = table
        self.record_type = record_type
        self.key_field = key_field

    def key_of(self, record: Record) -> str | int:
        return getattr(record, self.key_field)

    @classmethod
    def for_record(cls, record: Record) -> "EntityKind":
        for kind in cls:
            if isinstance(record, kind.record_type):
                return kind
        raise TypeError(f"Not a readlog record: {record!r}")
