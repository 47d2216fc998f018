"""
Form validation for user input.

Everything here runs before the mutation engine is called. The engine
assumes pre-validated primitives, so string parsing and emptiness checks
live only in this module.
"""

from readlog.domain.constants import MAX_RATING, MIN_RATING, THEMES
from readlog.domain.errors import ValidationError


def require_text(value: str | None, field: str) -> str:
    """Return ``value`` stripped, or raise if it is blank."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} must not be empty")
    return text


def parse_page_count(value: str | None) -> int:
    """Parse a total page count. Must be a positive integer."""
    try:
        pages = int((value or "").strip())
    except ValueError:
        raise ValidationError(f"Page count must be a whole number, got '{value}'") from None
    if pages <= 0:
        raise ValidationError(f"Page count must be positive, got {pages}")
    return pages


def parse_rating(value: int) -> int:
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {value}")
    return value


def parse_theme(value: str) -> int:
    """Accept a theme id or a theme name (case-insensitive)."""
    for theme_id, name in THEMES.items():
        if value.strip().lower() in (str(theme_id), name.lower()):
            return theme_id
    choices = ", ".join(THEMES.values())
    raise ValidationError(f"Unknown theme '{value}'. Choose one of: {choices}")


def validate_book_form(title: str, author: str, total_pages: str) -> tuple[str, str, int]:
    """Validate the new-book form. Author may be empty."""
    return require_text(title, "Title"), (author or "").strip(), parse_page_count(total_pages)
