from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_ONE_MS = timedelta(milliseconds=1)


def now_aware() -> datetime:
    return datetime.now(tz=UTC)


def to_canonical_instant(value: datetime) -> datetime:
    """
    Convert a datetime to the instant representation used for storage:
    UTC, truncated to millisecond precision. Naive values are assumed to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def to_epoch_ms(value: datetime) -> int:
    return (to_canonical_instant(value) - EPOCH) // _ONE_MS


def from_epoch_ms(value: int) -> datetime:
    return EPOCH + timedelta(milliseconds=value)
