"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch, used for quote identifiers."""
    return int(moment.timestamp() * 1000)
