"""Calendar-day helpers shared by the progress and streak code.

Every comparison here works on ``datetime.date`` values, never on raw
instants, so time of day and daylight-saving shifts cannot change a
day count.
"""

from datetime import UTC, date, datetime, timedelta


def today() -> date:
    """The local calendar date."""
    return date.today()


def now() -> datetime:
    return datetime.now(UTC)


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string."""
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def days_between(a: date, b: date) -> int:
    """Absolute number of calendar days between two dates."""
    return abs((b - a).days)


def days_ago(n: int, reference: date | None = None) -> date:
    return (reference or today()) - timedelta(days=n)
