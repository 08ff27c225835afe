"""Calendar helpers shared by the write and read paths.

Every walk timestamp is interpreted in UTC: naive values are assumed to be
UTC already and aware values are converted. A walk's calendar day is the UTC
date of its timestamp, and week windows run Sunday 00:00:00.000 through
Saturday 23:59:59.999 UTC. Walk timestamps are stored truncated to whole
milliseconds, so no stored walk falls between a week end and the next start.
"""

from datetime import date, datetime, time, timedelta, timezone

from walkmate.core.errors import InvalidDate

# Last representable instant of a day at millisecond resolution
_END_OF_DAY = time(23, 59, 59, 999000)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime (naive input is taken as UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_millis(dt: datetime) -> datetime:
    """UTC timestamp truncated to whole milliseconds, the resolution walks are stored at."""
    dt = ensure_utc(dt)
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def day_key(dt: datetime) -> date:
    """UTC calendar date of a timestamp."""
    return ensure_utc(dt).date()


def start_of_day(dt: datetime) -> datetime:
    return datetime.combine(day_key(dt), time.min, tzinfo=timezone.utc)


def end_of_day(dt: datetime) -> datetime:
    return datetime.combine(day_key(dt), _END_OF_DAY, tzinfo=timezone.utc)


def start_of_week(dt: datetime) -> datetime:
    """Sunday 00:00 UTC of the week containing ``dt``."""
    d = day_key(dt)
    # date.weekday(): Monday = 0 ... Sunday = 6; shift so Sunday = 0
    offset = (d.weekday() + 1) % 7
    return datetime.combine(d - timedelta(days=offset), time.min, tzinfo=timezone.utc)


def end_of_week(dt: datetime) -> datetime:
    """Saturday 23:59:59.999 UTC of the week containing ``dt``."""
    saturday = start_of_week(dt).date() + timedelta(days=6)
    return datetime.combine(saturday, _END_OF_DAY, tzinfo=timezone.utc)


def start_of_month(dt: datetime) -> datetime:
    d = day_key(dt)
    return datetime(d.year, d.month, 1, tzinfo=timezone.utc)


def start_of_next_month(dt: datetime) -> datetime:
    d = day_key(dt)
    if d.month == 12:
        return datetime(d.year + 1, 1, 1, tzinfo=timezone.utc)
    return datetime(d.year, d.month + 1, 1, tzinfo=timezone.utc)


def format_date(value) -> str:
    """Format a date or datetime as 'YYYY-MM-DD' (datetimes by UTC day)."""
    if isinstance(value, datetime):
        value = day_key(value)
    return value.isoformat()


def parse_date(text: str) -> datetime:
    """Parse 'YYYY-MM-DD' or an ISO-8601 timestamp into an aware UTC datetime.

    Accepts a trailing 'Z' and explicit offsets. Raises InvalidDate for
    anything else, including empty strings.
    """
    if text is None:
        raise InvalidDate(text)
    s = str(text).strip()
    if s == "":
        raise InvalidDate(text)
    try:
        parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidDate(text) from None
    return ensure_utc(parsed)
