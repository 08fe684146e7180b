from datetime import UTC, datetime
from time import perf_counter


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(tz=UTC)


def utc_now_str() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return utc_now().isoformat(timespec="seconds")


def ensure_utc(value: datetime) -> datetime:
    """
    Normalise a datetime to UTC.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def time_taken(start_time: float) -> str:
    minutes, seconds = divmod(perf_counter() - start_time, 60)
    return f"{int(minutes)}m {seconds:.2f}s"
