"""Row and query helpers shared by the SQLite stores."""

from datetime import datetime

import aiosqlite


def parse_timestamp(value: str | None) -> datetime:
    """Parse a stored ISO timestamp, falling back to now."""
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return datetime.utcnow()


def unicode_lower(value: str | None) -> str | None:
    """SQL function: full Unicode lowercase, NULL stays NULL."""
    return value.lower() if isinstance(value, str) else value


def label_pattern(query: str) -> str:
    """LIKE pattern for a case-insensitive substring match on labels.

    Matched against ``unicode_lower(label)``, so both sides are folded by
    Python rather than by the ASCII-only SQLite ``LOWER()``.
    """
    escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def is_locked_error(error: aiosqlite.OperationalError) -> bool:
    """True when SQLite gave up waiting for the write lock."""
    message = str(error).lower()
    return "locked" in message or "busy" in message
