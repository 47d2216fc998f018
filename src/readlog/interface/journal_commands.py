"""Goal and note subcommands."""

from typing import Annotated

import typer

from readlog.application.tracker import ReadingTracker
from readlog.domain.models import Goal, Note
from readlog.interface._common import (
    check,
    fail,
    find_by_id,
    format_ms,
    run_with_tracker,
    short_id,
)
from readlog.interface.forms import require_text

goal_app = typer.Typer(help="Manage reading goals.", no_args_is_help=True)
note_app = typer.Typer(help="Manage notes and quotes.", no_args_is_help=True)


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------


@goal_app.command("add")
def add_goal(
    ctx: typer.Context,
    description: Annotated[str, typer.Argument(help="What you want to achieve.")],
):
    """Add a goal."""
    description = check(require_text, description, "Description")

    async def action(tracker: ReadingTracker):
        await tracker.add_goal(description)

    run_with_tracker(ctx, action)
    typer.secho("Goal added.", fg="green")


@goal_app.command("list")
def list_goals(ctx: typer.Context):
    """List active and completed goals."""

    async def action(tracker: ReadingTracker) -> tuple[list[Goal], list[Goal]]:
        return tracker.stats.active_goals(), tracker.stats.completed_goals()

    active, completed = run_with_tracker(ctx, action)
    typer.echo("Active goals:")
    if not active:
        typer.echo("  (none)")
    for goal in active:
        typer.echo(f"  {short_id(goal.id)}  [ ] {goal.description}")

    typer.echo(f"Completed ({len(completed)}):")
    for goal in completed:
        typer.echo(
            f"  {short_id(goal.id)}  [x] {goal.description}  ({format_ms(goal.completion_date)})"
        )


@goal_app.command("toggle")
def toggle_goal(
    ctx: typer.Context,
    goal_id: Annotated[str, typer.Argument(help="Goal ID (or its last characters).")],
):
    """Mark a goal done, or undo that."""

    async def action(tracker: ReadingTracker) -> Goal:
        goal = find_by_id(tracker.goals.value, goal_id)
        if goal is None:
            fail(f"No goal matching '{goal_id}'.")
        await tracker.toggle_goal(goal.id)
        return goal

    goal = run_with_tracker(ctx, action)
    state = "open again" if goal.is_completed else "completed"
    typer.echo(f"'{goal.description}' is {state}.")


@goal_app.command("delete")
def delete_goal(
    ctx: typer.Context,
    goal_id: Annotated[str, typer.Argument(help="Goal ID (or its last characters).")],
):
    """Delete a goal."""

    async def action(tracker: ReadingTracker):
        goal = find_by_id(tracker.goals.value, goal_id)
        if goal is None:
            fail(f"No goal matching '{goal_id}'.")
        await tracker.delete_goal(goal.id)

    run_with_tracker(ctx, action)
    typer.echo("Goal deleted.")


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


@note_app.command("add")
def add_note(
    ctx: typer.Context,
    book_id: Annotated[str, typer.Argument(help="Book ID (or its last characters).")],
    content: Annotated[str, typer.Argument(help="Note or quote text.")],
):
    """Attach a note or quote to a book."""
    content = check(require_text, content, "Note")

    async def action(tracker: ReadingTracker):
        # Unknown keys are stored as given; notes may point at missing books.
        book = find_by_id(tracker.books.value, book_id)
        await tracker.add_note(book.id if book else book_id, content)

    run_with_tracker(ctx, action)
    typer.secho("Note saved.", fg="green")


@note_app.command("list")
def list_notes(
    ctx: typer.Context,
    book_id: Annotated[
        str | None, typer.Option("--book", "-b", help="Only notes for this book.")
    ] = None,
):
    """List notes, newest first."""

    async def action(tracker: ReadingTracker) -> tuple[list[Note], dict[str, str]]:
        titles = {b.id: b.title for b in tracker.books.value}
        if book_id is None:
            notes = sorted(tracker.notes.value, key=lambda n: n.date, reverse=True)
        else:
            book = find_by_id(tracker.books.value, book_id)
            notes = tracker.stats.notes_for_book(book.id if book else book_id)
        return notes, titles

    notes, titles = run_with_tracker(ctx, action)
    if not notes:
        typer.secho("No notes yet.", fg="yellow")
        return
    for note in notes:
        source = titles.get(note.book_id, "(deleted book)")
        typer.echo(f"{short_id(note.id)}  {format_ms(note.date)}  {source}")
        typer.echo(f"    “{note.content}”")


@note_app.command("delete")
def delete_note(
    ctx: typer.Context,
    note_id: Annotated[str, typer.Argument(help="Note ID (or its last characters).")],
):
    """Delete a note."""

    async def action(tracker: ReadingTracker):
        note = find_by_id(tracker.notes.value, note_id)
        if note is None:
            fail(f"No note matching '{note_id}'.")
        await tracker.delete_note(note.id)

    run_with_tracker(ctx, action)
    typer.echo("Note deleted.")
