from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from uuid6 import uuid7

from .errors import InvalidIdentifier


# PUBLIC_INTERFACE
def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a timestamp to aware UTC.
    - Naive timestamps are taken to be UTC.
    - Aware timestamps are converted to UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# PUBLIC_INTERFACE
def new_todo_id() -> UUID:
    """
    Generate a fresh, time-ordered todo id.

    Returns:
        A version 7 UUID. Its natural ordering follows creation time, so ids
        generated later sort after ids generated earlier.
    """
    return UUID(int=uuid7().int)


# PUBLIC_INTERFACE
def parse_todo_id(value: str) -> UUID:
    """
    Parse id text given on the command line.

    Args:
        value: Text form of a UUID (hyphenated, braced, urn or bare hex).

    Returns:
        The parsed UUID.

    Raises:
        InvalidIdentifier: if the text is not a valid UUID.
    """
    try:
        return UUID(value)
    except (TypeError, ValueError) as e:
        raise InvalidIdentifier() from e
