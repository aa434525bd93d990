"""
Year resolution for month/day-only transaction dates.
"""
from datetime import date
import logging

from .normalize import month_number
from ..errors import InvalidPeriod, InvalidTransactionDate
from ..models.schema import StatementPeriod

logger = logging.getLogger(__name__)


def resolve_year(day: int, month: int, period: StatementPeriod) -> int:
    """
    Pick the calendar year of a transaction dated only by month and day.

    A period inside one year gives that year. For a period that crosses New
    Year, the first year whose date falls inside the period wins. A date that
    fits no year takes the start year from the start month onwards and the
    end year before it.

    Args:
        day: Day of month
        month: Month number 1-12
        period: Billing period the transaction was listed in

    Returns:
        Four digit year

    Raises:
        InvalidPeriod: the period ends before it starts
    """
    if period.end < period.start:
        raise InvalidPeriod(f"Statement period ends before it starts: {period.start} to {period.end}")

    if not period.crosses_year:
        return period.start.year

    for year in range(period.start.year, period.end.year + 1):
        try:
            candidate = date(year, month, day)
        except ValueError:
            continue
        if period.contains(candidate):
            return year

    # Nothing fits; fall back so the caller reports the date as outside.
    if month >= period.start.month:
        return period.start.year
    return period.end.year


def resolve_date(month_token: str, day_token: str, period: StatementPeriod) -> date:
    """
    Turn a "DEC" / "22" token pair into a calendar date within ``period``.

    Raises:
        InvalidTransactionDate: unknown month token or impossible day
    """
    month = month_number(month_token)
    if month is None:
        raise InvalidTransactionDate(f"Unknown month {month_token!r}")

    day = int(day_token)
    year = resolve_year(day, month, period)
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidTransactionDate(
            f"Invalid calendar date {month_token} {day_token} for year {year}"
        ) from exc
