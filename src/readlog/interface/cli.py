"""readlog CLI: root commands and subgroup registration."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from readlog.application.tracker import ReadingTracker
from readlog.consts import VERSION
from readlog.domain.constants import THEMES
from readlog.domain.models import AppRating, AppSettings
from readlog.interface._common import (
    _resolve_with_overrides,
    check,
    humanize_error,  # noqa: F401
    run_with_tracker,
)
from readlog.interface.forms import parse_rating, parse_theme

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="readlog: Track your reading, goals and streaks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

logger = logging.getLogger(__name__)


def configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose >= 3:
        level = logging.DEBUG
    elif verbose == 2:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
        force=True,
    )


# ---------------------------------------------------------------------------
# Register subgroups
# ---------------------------------------------------------------------------

from readlog.interface.book_commands import book_app  # noqa: E402
from readlog.interface.journal_commands import goal_app, note_app  # noqa: E402

app.add_typer(book_app, name="book")
app.add_typer(goal_app, name="goal")
app.add_typer(note_app, name="note")

challenge_app = typer.Typer(help="Yearly reading challenge.", no_args_is_help=True)
app.add_typer(challenge_app, name="challenge")

config_app = typer.Typer(help="Manage readlog configuration.")
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    db_path: Annotated[
        Path | None, typer.Option("--db", help="SQLite database file.")
    ] = None,
    backend: Annotated[
        str | None, typer.Option(help="Storage backend: sqlite, memory.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for readlog."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {"db_path": db_path, "backend": backend}
    configure_logging(verbose)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def version():
    """Show the readlog version."""
    typer.echo(VERSION)


@app.command()
def stats(ctx: typer.Context):
    """[bold green]Weekly[/bold green] pages, totals and your current streak."""

    async def action(tracker: ReadingTracker):
        return tracker.weekly_stats.value, tracker.total_pages_read, tracker.reading_streak

    weekly, total, streak = run_with_tracker(ctx, action)

    peak = max((s.pages for s in weekly), default=0) or 1
    typer.echo("Weekly progress:")
    for stat in weekly:
        bar = "#" * round(20 * stat.pages / peak)
        typer.echo(f"  {stat.day}  {bar:<20} {stat.pages}")
    typer.echo(f"Total pages read: {total}")
    typer.echo(f"Reading streak: {streak} day{'s' if streak != 1 else ''}")
    if streak >= 3:
        typer.secho("On Fire!", fg="bright_red", bold=True)


@app.command()
def rate(
    ctx: typer.Context,
    rating: Annotated[int, typer.Argument(help="Rating from 0 to 10.")],
    feedback: Annotated[str, typer.Option("--feedback", "-f", help="Optional feedback.")] = "",
):
    """Rate readlog. Replaces any earlier rating."""
    rating = check(parse_rating, rating)

    async def action(tracker: ReadingTracker) -> AppRating | None:
        await tracker.save_app_rating(rating, feedback.strip())
        return tracker.app_rating.value

    saved = run_with_tracker(ctx, action)
    typer.secho(f"Thanks! Saved {rating}/10.", fg="green")
    if saved is not None and saved.feedback:
        typer.echo(f"“{saved.feedback}”")


@app.command()
def theme(
    ctx: typer.Context,
    name: Annotated[
        str | None, typer.Argument(help="Theme name or id. Omit to show the current one.")
    ] = None,
):
    """Show or change the colour theme."""
    theme_id = check(parse_theme, name) if name is not None else None

    async def action(tracker: ReadingTracker) -> AppSettings | None:
        if theme_id is not None:
            await tracker.save_app_settings(theme_id)
        return tracker.app_settings.value

    settings = run_with_tracker(ctx, action)
    current = settings.theme_id if settings else 0
    typer.echo(f"Theme: {THEMES[current]}")


# ---------------------------------------------------------------------------
# Challenge
# ---------------------------------------------------------------------------


@challenge_app.command("set")
def challenge_set(
    ctx: typer.Context,
    goal: Annotated[int, typer.Argument(help="Number of books to finish.")],
    year: Annotated[int | None, typer.Option(help="Challenge year. Defaults to this year.")] = None,
):
    """Set the number of books you want to finish this year."""

    async def action(tracker: ReadingTracker) -> int:
        target_year = year if year is not None else tracker.clock.now().year
        await tracker.set_yearly_challenge(target_year, goal)
        return target_year

    target_year = run_with_tracker(ctx, action)
    typer.secho(f"Challenge for {target_year}: {goal} books.", fg="green")


@challenge_app.command("show")
def challenge_show(
    ctx: typer.Context,
    year: Annotated[int | None, typer.Option(help="Challenge year. Defaults to this year.")] = None,
):
    """Show progress towards the yearly challenge."""

    async def action(tracker: ReadingTracker):
        return tracker.stats.challenge_progress(year)

    progress = run_with_tracker(ctx, action)
    if progress is None:
        typer.secho("No challenge set. Use 'readlog challenge set'.", fg="yellow")
        return
    typer.echo(
        f"{progress.year}: {progress.finished}/{progress.goal} books "
        f"({int(progress.fraction * 100)}%)"
    )


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display the resolved configuration as JSON."""
    config = _resolve_with_overrides(ctx)
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))


def main():
    app()


if __name__ == "__main__":
    main()
