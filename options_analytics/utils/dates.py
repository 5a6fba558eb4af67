"""Day-count helpers for deriving time to expiry."""

from datetime import date, datetime
from typing import Optional, Union

from options_analytics.utils.constants import DAYS_PER_YEAR

DateLike = Union[date, datetime, str]


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def year_fraction(expiration: DateLike, as_of: Optional[DateLike] = None) -> float:
    """
    Convert a calendar-day count to years (actual/365).

    Args:
        expiration: Expiration date (date, datetime or ISO 'YYYY-MM-DD' string)
        as_of: Valuation date, defaults to today

    Returns:
        Time to expiry in years. Zero or negative when the option has expired;
        the pricing engine is undefined there, so callers should check.

    Examples:
        >>> year_fraction("2025-12-31", as_of="2025-01-01")
        0.9972602739726028
    """
    start = _to_date(as_of) if as_of is not None else date.today()
    days = (_to_date(expiration) - start).days
    return days / DAYS_PER_YEAR
