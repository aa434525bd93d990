"""
Statement period extraction.
"""
import re
import logging

from .normalize import normalize_date
from ..errors import AmbiguousStatementPeriod, InvalidPeriod, MissingStatementPeriod
from ..models.schema import StatementPeriod

logger = logging.getLogger(__name__)


STATEMENT_PERIOD_RE = re.compile(
    r"STATEMENT PERIOD:\s*"
    r"(?P<start_month>[A-Za-z]+)\s+(?P<start_day>\d{1,2}),\s*(?P<start_year>\d{4})"
    r"\s+to\s+"
    r"(?P<end_month>[A-Za-z]+)\s+(?P<end_day>\d{1,2}),\s*(?P<end_year>\d{4})(?!\d)",
    re.IGNORECASE,
)


def extract_period(text: str) -> StatementPeriod:
    """
    Find the billing period of a statement.

    Args:
        text: Full statement text

    Returns:
        StatementPeriod with both calendar dates

    Raises:
        MissingStatementPeriod: no period line in the text
        AmbiguousStatementPeriod: more than one period line in the text
        InvalidPeriod: the dates are not real dates or end before they start
    """
    matches = list(STATEMENT_PERIOD_RE.finditer(text))
    if not matches:
        raise MissingStatementPeriod("No 'STATEMENT PERIOD' line found in statement")
    if len(matches) > 1:
        found = ", ".join(repr(m.group(0)) for m in matches)
        raise AmbiguousStatementPeriod(f"Found {len(matches)} statement period lines: {found}")

    match = matches[0]
    start = normalize_date(match["start_month"], match["start_day"], match["start_year"])
    end = normalize_date(match["end_month"], match["end_day"], match["end_year"])
    if start is None or end is None:
        raise InvalidPeriod(f"Statement period is not a calendar date range: {match.group(0)!r}")
    if end < start:
        raise InvalidPeriod(f"Statement period ends before it starts: {start} to {end}")

    logger.info(f"Statement period: {start} to {end}")
    return StatementPeriod(start=start, end=end)
