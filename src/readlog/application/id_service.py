"""Identifier generation for new records."""

from ulid import ULID


def generate_record_id() -> str:
    """Generate a stable, time-sortable record ID using ULID."""
    return str(ULID())
