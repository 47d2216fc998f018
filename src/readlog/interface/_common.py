"""Shared helpers for CLI commands."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime
from typing import Any, NoReturn, TypeVar

import typer

from readlog.application.config import AppConfig, resolve_config
from readlog.application.factory import build_tracker
from readlog.application.tracker import ReadingTracker
from readlog.domain.errors import ReadlogError, StorageError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _resolve_with_overrides(ctx: typer.Context | None = None, **kwargs: Any) -> AppConfig:
    """Merge global CLI options stored on the context with per-command overrides."""
    overrides: dict[str, Any] = {}
    if ctx is not None and isinstance(ctx.obj, dict):
        overrides.update(ctx.obj.get("overrides", {}))
    overrides.update(kwargs)
    return resolve_config(overrides)


def humanize_error(exc: Exception) -> str:
    """Turn an engine error into a one-line message for the terminal."""
    if isinstance(exc, ValidationError):
        return f"Invalid input: {exc}"
    if isinstance(exc, StorageError):
        return f"Storage error: {exc}. Check 'readlog config show' for the database path."
    return str(exc)


def run_with_tracker(
    ctx: typer.Context, action: Callable[[ReadingTracker], Awaitable[T]]
) -> T:
    """
    Build a tracker from the resolved config, run ``action`` against it and
    tear everything down again. Engine errors exit with status 1.
    """
    config = _resolve_with_overrides(ctx)

    async def run() -> T:
        async with build_tracker(config) as tracker:
            return await action(tracker)

    try:
        return asyncio.run(run())
    except ReadlogError as e:
        logger.debug("Command failed", exc_info=True)
        typer.secho(humanize_error(e), fg="red", err=True)
        raise typer.Exit(1) from None


def check(validator: Callable[..., T], *args: Any) -> T:
    """Run a form validator; print the problem and exit on failure."""
    try:
        return validator(*args)
    except ValidationError as e:
        typer.secho(humanize_error(e), fg="red", err=True)
        raise typer.Exit(1) from None


def find_by_id(items: Iterable[T], key: str) -> T | None:
    """
    Return the single item whose ``id`` equals ``key`` or ends with it.

    Listings show the last eight characters of each ULID, which is the
    random part and therefore distinct even for records created together.
    """
    matches = [item for item in items if str(item.id) == key or str(item.id).endswith(key)]
    if len(matches) == 1:
        return matches[0]
    return None


def fail(message: str) -> NoReturn:
    typer.secho(message, fg="yellow", err=True)
    raise typer.Exit(1)


def short_id(record_id: str) -> str:
    return record_id[-8:]


def format_ms(epoch_ms: int | None) -> str:
    if epoch_ms is None:
        return "-"
    return datetime.fromtimestamp(epoch_ms / 1000).strftime("%Y-%m-%d")
