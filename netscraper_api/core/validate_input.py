"""Input Normalization — pure helpers shared by both repository backends.

Invariants:
    - No IO; every function is deterministic
    - Group-name identity is case-insensitive: name_key() is the single definition,
      used by the in-memory backend and stored in the name_key column by SQL
"""

from datetime import datetime, timezone

from netscraper_api.core.errors import ValidationError


def require_text(value: str | None, field: str, label: str) -> str:
    """Return value stripped, or raise ValidationError if blank."""
    stripped = (value or "").strip()
    if not stripped:
        raise ValidationError(f"{label} required", field)
    return stripped


def name_key(name: str) -> str:
    """Comparison key for group-name uniqueness, persisted as search_groups.name_key."""
    return name.strip().casefold()


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Drop tzinfo after converting aware datetimes to UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
