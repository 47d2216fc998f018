"""
SQLAlchemy table definitions for the SQLite gateway.

One table per entity kind, named after ``EntityKind.table``; column names
match the record dataclass fields so rows map straight back onto records.
Timestamps are epoch milliseconds.
"""

from sqlalchemy import BigInteger, Boolean, Column, Integer, MetaData, String, Table

from readlog.domain.models import EntityKind

metadata = MetaData()

books = Table(
    "books",
    metadata,
    Column("id", String, primary_key=True),
    Column("title", String, nullable=False),
    Column("author", String, nullable=False),
    Column("total_pages", Integer, nullable=False),
    Column("read_pages", Integer, nullable=False, default=0),
    Column("is_finished", Boolean, nullable=False, default=False),
    Column("rating", Integer),
    Column("review", String),
    Column("finished_date", BigInteger),
    Column("is_wishlist", Boolean, nullable=False, default=False),
)

goals = Table(
    "goals",
    metadata,
    Column("id", String, primary_key=True),
    Column("description", String, nullable=False),
    Column("is_completed", Boolean, nullable=False, default=False),
    Column("completion_date", BigInteger),
)

# No foreign key on book_id: notes outlive their book.
notes = Table(
    "notes",
    metadata,
    Column("id", String, primary_key=True),
    Column("book_id", String, nullable=False),
    Column("content", String, nullable=False),
    Column("date", BigInteger, nullable=False),
)

daily_stats = Table(
    "daily_stats",
    metadata,
    Column("day", String, primary_key=True),
    Column("pages", Integer, nullable=False, default=0),
)

app_rating = Table(
    "app_rating",
    metadata,
    Column("rating", Integer, nullable=False),
    Column("feedback", String, nullable=False),
    Column("date", BigInteger, nullable=False),
    Column("id", Integer, primary_key=True, autoincrement=False),
)

yearly_challenge = Table(
    "yearly_challenge",
    metadata,
    Column("year", Integer, primary_key=True, autoincrement=False),
    Column("goal", Integer, nullable=False),
)

app_settings = Table(
    "app_settings",
    metadata,
    Column("theme_id", Integer, nullable=False),
    Column("id", Integer, primary_key=True, autoincrement=False),
)

TABLES: dict[EntityKind, Table] = {kind: metadata.tables[kind.table] for kind in EntityKind}
