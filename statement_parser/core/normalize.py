"""
Data normalization helpers shared by the parsing stages.
"""
import re
from datetime import datetime, date
from typing import Optional
import logging

logger = logging.getLogger(__name__)


MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}


def month_number(token: str) -> Optional[int]:
    """
    Map a three letter month token to its number.

    Args:
        token: Month token such as "DEC" (case-insensitive)

    Returns:
        Month number 1-12, or None for an unknown token
    """
    return MONTHS.get(token.strip().upper())


def normalize_date(month: str, day: str, year: str) -> Optional[date]:
    """
    Build a date from a month name, day and year as printed on a statement.

    Full month names ("December") and abbreviations ("Dec") are accepted.

    Args:
        month: Month name, any case
        day: Day of month, 1-2 digits
        year: Four digit year

    Returns:
        Date object or None if the parts don't form a calendar date
    """
    cleaned = f"{month.strip().title()} {int(day)} {year.strip()}"

    for format_str in ("%B %d %Y", "%b %d %Y"):
        try:
            return datetime.strptime(cleaned, format_str).date()
        except ValueError:
            continue

    logger.warning(f"Could not parse date: {month} {day}, {year}")
    return None


def card_suffix(card_key: str) -> str:
    """
    Derive the 4-digit card number suffix from a masked card marker.

    Args:
        card_key: Masked card number, e.g. "1234 56XX XXXX 7890"

    Returns:
        Last four digits, e.g. "7890"
    """
    digits = re.sub(r"\D", "", card_key)
    return digits[-4:]
