# Domain Package
from .errors import ReadlogError, StorageError, ValidationError
from .models import (
    AppRating,
    AppSettings,
    Book,
    DailyStat,
    EntityKind,
    Goal,
    Note,
    YearlyChallenge,
)
from .ports import CallbackSubscription, RecordGateway, Subscription

__all__ = [
    "AppRating",
    "AppSettings",
    "Book",
    "DailyStat",
    "EntityKind",
    "Goal",
    "Note",
    "YearlyChallenge",
    "RecordGateway",
    "Subscription",
    "CallbackSubscription",
    "ReadlogError",
    "StorageError",
    "ValidationError",
]
