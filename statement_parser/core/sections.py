"""
Segmentation of statement text by masked card number.
"""
import re
import logging
from typing import Dict, List

from ..models.schema import CardSection

logger = logging.getLogger(__name__)


CARD_MARKER_RE = re.compile(r"\d{4} \d{2}XX XXXX \d{4}")


def is_card_marker(line: str) -> bool:
    """Return True if the trimmed line is a masked card number and nothing else."""
    return CARD_MARKER_RE.fullmatch(line.strip()) is not None


def split_by_card(text: str) -> Dict[str, List[str]]:
    """
    Group statement lines under the card marker they follow.

    Lines before the first marker are dropped. A marker seen again later
    keeps appending to the bucket it already has.

    Args:
        text: Full statement text

    Returns:
        Mapping of card marker to its lines, in order of first appearance
    """
    card_data: Dict[str, List[str]] = {}
    current_card = None

    for line in text.splitlines():
        if is_card_marker(line):
            current_card = line.strip()
            if current_card not in card_data:
                logger.debug(f"New card section: {current_card}")
            card_data.setdefault(current_card, [])
        elif current_card is not None:
            card_data[current_card].append(line)

    if not card_data:
        logger.warning("No card number found in statement")

    return card_data


def split_sections(text: str) -> List[CardSection]:
    """Same as :func:`split_by_card`, as a list of CardSection models."""
    return [
        CardSection(card_key=card_key, lines=lines)
        for card_key, lines in split_by_card(text).items()
    ]
