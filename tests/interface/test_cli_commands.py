"""Tests for CLI commands: help, books, goals, notes, stats, rating, theme, challenge, config."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from readlog.consts import VERSION
from readlog.domain.errors import StorageError, ValidationError
from readlog.interface.cli import app, humanize_error

runner = CliRunner()


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "reading.db")


def invoke(db, *args):
    return runner.invoke(app, ["--db", db, *args])


def first_id(output: str) -> str:
    return output.strip().splitlines()[0].split()[0]


# --- Help & version ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "readlog: Track your reading" in result.stdout
    assert "book" in result.stdout
    assert "stats" in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert VERSION in result.stdout


# --- Books ---


def test_add_and_list_book(db):
    result = invoke(db, "book", "add", "Dune", "--author", "Frank Herbert", "--pages", "412")
    assert result.exit_code == 0
    assert "Added 'Dune'" in result.stdout

    result = invoke(db, "book", "list")
    assert result.exit_code == 0
    assert "Dune by Frank Herbert  0/412 (0%)" in result.stdout


def test_add_book_rejects_bad_page_count(db):
    result = invoke(db, "book", "add", "Dune", "--pages", "lots")
    assert result.exit_code == 1

    result = invoke(db, "book", "list")
    assert "No books yet." in result.stdout


def test_progress_is_clamped_and_counted(db):
    invoke(db, "book", "add", "Emma", "--pages", "100")
    book_id = first_id(invoke(db, "book", "list").stdout)

    result = invoke(db, "book", "progress", book_id, "150")
    assert result.exit_code == 0
    assert "100/100 (100%)" in result.stdout

    result = invoke(db, "stats")
    assert result.exit_code == 0
    assert "Total pages read: 100" in result.stdout
    assert "Reading streak: 1 day" in result.stdout


def test_finish_book(db):
    invoke(db, "book", "add", "Emma", "--pages", "100")
    book_id = first_id(invoke(db, "book", "list").stdout)

    result = invoke(db, "book", "finish", book_id, "--rating", "8", "--review", "Charming")
    assert result.exit_code == 0
    assert "Finished 'Emma' with 8/10." in result.stdout

    result = invoke(db, "book", "list", "--show", "finished")
    assert "8/10" in result.stdout


def test_finish_rejects_bad_rating(db):
    invoke(db, "book", "add", "Emma", "--pages", "100")
    book_id = first_id(invoke(db, "book", "list").stdout)

    result = invoke(db, "book", "finish", book_id, "--rating", "11")
    assert result.exit_code == 1


def test_unknown_book_exits_with_message(db):
    result = invoke(db, "book", "progress", "nope", "10")
    assert result.exit_code == 1


def test_delete_book_keeps_notes(db):
    invoke(db, "book", "add", "Emma", "--pages", "100")
    book_id = first_id(invoke(db, "book", "list").stdout)
    invoke(db, "note", "add", book_id, "Badly done, Emma!")

    result = invoke(db, "book", "delete", book_id)
    assert result.exit_code == 0

    result = invoke(db, "note", "list")
    assert "Badly done, Emma!" in result.stdout
    assert "(deleted book)" in result.stdout


# --- Goals ---


def test_goal_lifecycle(db):
    result = invoke(db, "goal", "add", "Read 12 books")
    assert result.exit_code == 0

    listing = invoke(db, "goal", "list").stdout
    goal_id = listing.splitlines()[1].split()[0]
    assert "[ ] Read 12 books" in listing

    result = invoke(db, "goal", "toggle", goal_id)
    assert "completed" in result.stdout
    assert "[x] Read 12 books" in invoke(db, "goal", "list").stdout

    invoke(db, "goal", "delete", goal_id)
    assert "Read 12 books" not in invoke(db, "goal", "list").stdout


def test_blank_goal_rejected(db):
    result = invoke(db, "goal", "add", "   ")
    assert result.exit_code == 1


# --- Rating, theme, challenge ---


def test_rate_app(db):
    result = invoke(db, "rate", "9", "--feedback", "Lovely")
    assert result.exit_code == 0
    assert "Saved 9/10" in result.stdout
    assert "Lovely" in result.stdout


def test_theme_show_and_set(db):
    assert "Theme: Default" in invoke(db, "theme").stdout
    assert "Theme: Sunset" in invoke(db, "theme", "sunset").stdout
    assert "Theme: Sunset" in invoke(db, "theme").stdout


def test_challenge(db):
    assert "No challenge set" in invoke(db, "challenge", "show", "--year", "2026").stdout

    result = invoke(db, "challenge", "set", "12", "--year", "2026")
    assert result.exit_code == 0

    result = invoke(db, "challenge", "show", "--year", "2026")
    assert "2026: 0/12 books (0%)" in result.stdout


# --- Errors & config ---


def test_storage_error_is_humanized(db):
    with patch(
        "readlog.application.factory.SqliteRecordGateway",
        side_effect=StorageError("disk I/O error"),
    ):
        result = invoke(db, "book", "list")

    assert result.exit_code == 1


def test_humanize_error():
    assert humanize_error(ValidationError("Title must not be empty")).startswith("Invalid input")
    assert "Storage error: locked" in humanize_error(StorageError("locked"))


def test_config_show(db):
    result = invoke(db, "config", "show")
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["backend"] == "sqlite"
    assert data["db_path"].endswith("reading.db")


def test_config_show_env_override(monkeypatch):
    monkeypatch.setenv("READLOG_BACKEND", "memory")
    result = runner.invoke(app, ["config", "show"])
    assert json.loads(result.stdout)["backend"] == "memory"
