"""UTC datetime utilities for response timestamps."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as an aware datetime."""
    return datetime.now(UTC)


def iso_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with a ``Z`` suffix.

    Matches the ``Date.toISOString()`` shape the web player already parses,
    e.g. ``2024-05-01T12:34:56.789Z``.
    """
    return utcnow().isoformat(timespec="milliseconds").replace("+00:00", "Z")
