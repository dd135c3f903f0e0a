from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC now; the store keeps timestamps without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(value) -> datetime:
    """
    datetime or ISO-8601 text ("2030-01-01", "2030-01-01T10:00:00Z", ...).
    Naive values are taken as UTC. Raises ValueError on anything else.
    """
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError("expected an ISO-8601 date string")

    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    return to_naive_utc(datetime.fromisoformat(raw))


def isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat() + "Z"
