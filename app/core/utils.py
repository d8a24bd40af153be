"""Core utility functions for the application"""

from datetime import date
from decimal import Decimal
from typing import Optional, Tuple, Union


def to_amount(value: Optional[Union[Decimal, float, int]]) -> float:
    """
    Convert a currency value coming out of SQL into a JSON number.
    NULL aggregates (e.g. SUM over no rows) become 0.
    """
    if value is None:
        return 0.0
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return float(round(value, 2))


def to_number(value: Optional[Union[Decimal, float, int]]) -> float:
    """Like `to_amount` but keeps full precision (NULL becomes 0)."""
    return 0.0 if value is None else float(value)


def month_key(year: Union[int, float], month: Union[int, float]) -> str:
    """
    Format a year/month pair as returned by SQL EXTRACT.

    Returns:
        str: "YYYY-MM" (e.g. "2024-03")
    """
    return f"{int(year):04d}-{int(month):02d}"


def year_bounds(today: date) -> Tuple[date, date]:
    """
    First and last calendar day of `today`'s year.

    Args:
        today: Any date in the year

    Returns:
        (January 1, December 31)
    """
    return date(today.year, 1, 1), date(today.year, 12, 31)

