"""Book subcommands: add, list, progress, finish, delete."""

from typing import Annotated

import typer

from readlog.application.tracker import ReadingTracker
from readlog.domain.constants import DEFAULT_RATING
from readlog.domain.models import Book
from readlog.interface._common import (
    check,
    fail,
    find_by_id,
    format_ms,
    run_with_tracker,
    short_id,
)
from readlog.interface.forms import parse_rating, validate_book_form

book_app = typer.Typer(help="Manage books on your shelf.", no_args_is_help=True)


def format_book(book: Book) -> str:
    pct = int(book.progress * 100)
    line = f"{short_id(book.id)}  {book.title}"
    if book.author:
        line += f" by {book.author}"
    if book.is_finished:
        return f"{line}  [finished {format_ms(book.finished_date)}, {book.rating}/10]"
    return f"{line}  {book.read_pages}/{book.total_pages} ({pct}%)"


def _require_book(tracker: ReadingTracker, key: str) -> Book:
    book = find_by_id(tracker.books.value, key)
    if book is None:
        fail(f"No book matching '{key}'.")
    return book


@book_app.command("add")
def add_book(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Book title.")],
    pages: Annotated[str, typer.Option("--pages", "-p", help="Total page count.")],
    author: Annotated[str, typer.Option("--author", "-a", help="Book author.")] = "",
    wishlist: Annotated[
        bool, typer.Option("--wishlist", help="Put the book on the wishlist.")
    ] = False,
):
    """Add a new book."""
    title, author, total_pages = check(validate_book_form, title, author, pages)

    async def action(tracker: ReadingTracker):
        await tracker.add_book(title, author, total_pages, is_wishlist=wishlist)

    run_with_tracker(ctx, action)
    typer.secho(f"Added '{title}' ({total_pages} pages).", fg="green")


@book_app.command("list")
def list_books(
    ctx: typer.Context,
    show: Annotated[
        str, typer.Option(help="Which books: reading, finished, wishlist, all.")
    ] = "reading",
):
    """List books."""

    async def action(tracker: ReadingTracker) -> list[Book]:
        stats = tracker.stats
        if show == "finished":
            return stats.finished_books()
        if show == "wishlist":
            return stats.wishlist()
        if show == "all":
            return list(tracker.books.value)
        return stats.reading_list()

    books = run_with_tracker(ctx, action)
    if not books:
        typer.secho("No books yet.", fg="yellow")
        return
    for book in books:
        typer.echo(format_book(book))


@book_app.command("progress")
def update_progress(
    ctx: typer.Context,
    book_id: Annotated[str, typer.Argument(help="Book ID (or its last characters).")],
    pages: Annotated[int, typer.Argument(help="Total pages read so far.")],
):
    """Record how far you have read."""

    async def action(tracker: ReadingTracker) -> Book:
        book = _require_book(tracker, book_id)
        await tracker.update_read_pages(book.id, pages)
        return tracker.store.find_book(book.id) or book

    book = run_with_tracker(ctx, action)
    typer.echo(format_book(book))


@book_app.command("finish")
def finish_book(
    ctx: typer.Context,
    book_id: Annotated[str, typer.Argument(help="Book ID (or its last characters).")],
    rating: Annotated[int, typer.Option("--rating", "-r", help="Rating from 0 to 10.")] = DEFAULT_RATING,
    review: Annotated[str, typer.Option("--review", help="A short review.")] = "",
):
    """Mark a book as finished."""
    rating = check(parse_rating, rating)

    async def action(tracker: ReadingTracker) -> Book:
        book = _require_book(tracker, book_id)
        await tracker.finish_book(book.id, rating, review)
        return book

    book = run_with_tracker(ctx, action)
    typer.secho(f"Finished '{book.title}' with {rating}/10.", fg="green")


@book_app.command("delete")
def delete_book(
    ctx: typer.Context,
    book_id: Annotated[str, typer.Argument(help="Book ID (or its last characters).")],
):
    """Delete a book. Its notes are kept."""

    async def action(tracker: ReadingTracker) -> Book:
        book = _require_book(tracker, book_id)
        await tracker.delete_book(book.id)
        return book

    book = run_with_tracker(ctx, action)
    typer.echo(f"Deleted '{book.title}'.")
