"""
Transaction line matching.
"""
import re
import logging
from typing import List

from ..models.schema import RawMatch

logger = logging.getLogger(__name__)


# e.g. "DEC 22 DEC 23-$45.67NETFLIX" or "JAN 15 JAN 15 $24.99AMAZON PRIME"
TRANSACTION_RE = re.compile(
    r"^(?P<start_month>[A-Z]{3}) (?P<start_day>\d{1,2}) "
    r"(?P<end_month>[A-Z]{3}) (?P<end_day>\d{1,2}) ?"
    r"(?P<amount>-?\$\d+\.\d{2})"
    r"(?P<vendor>.+)$",
    re.MULTILINE,
)


def parse_line(line: str) -> List[RawMatch]:
    """
    Extract transaction fields from a statement line.

    The whole line has to match; anything else is not a transaction row and
    gives an empty list.

    Args:
        line: One line of statement text

    Returns:
        List of RawMatch, usually zero or one
    """
    matches = [
        RawMatch(**match.groupdict())
        for match in TRANSACTION_RE.finditer(line)
    ]
    if not matches:
        logger.debug(f"Skipping non-transaction line: {line!r}")
    return matches
