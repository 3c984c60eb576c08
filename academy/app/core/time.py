"""Time utilities for timezone-aware UTC datetimes."""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def today() -> date:
    return utc_now().date()


def current_year_month() -> str:
    """Billing month key in ``YYYY-MM`` form."""
    return utc_now().strftime("%Y-%m")


def month_bounds(month: str) -> tuple[date, date]:
    """Inclusive start and exclusive end of a ``YYYY-MM`` month.

    Raises ValueError for anything that is not a real month.
    """
    year_part, _, month_part = month.partition("-")
    year, mon = int(year_part), int(month_part)
    start = date(year, mon, 1)
    end = date(year + 1, 1, 1) if mon == 12 else date(year, mon + 1, 1)
    return start, end
