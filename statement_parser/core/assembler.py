"""
Assembly of parsed lines into Transaction records.
"""
import logging
from typing import Dict, List, Optional

from .lines import parse_line
from .normalize import card_suffix
from .years import resolve_date
from ..errors import DateOutsidePeriod, TransactionDateOrder
from ..models.schema import RawMatch, StatementPeriod, Transaction
from ..storage.repository import TransactionRepository

logger = logging.getLogger(__name__)


def build_transaction(card_key: str, raw: RawMatch, period: StatementPeriod) -> Transaction:
    """
    Build one Transaction from a matched line.

    Args:
        card_key: Card marker the line was found under
        raw: Fields matched on the line
        period: Statement period used for year resolution

    Returns:
        Unsaved Transaction (id 0)

    Raises:
        DateOutsidePeriod: a resolved date is not inside ``period``
        TransactionDateOrder: the start date resolves after the end date
    """
    start = resolve_date(raw.start_month, raw.start_day, period)
    end = resolve_date(raw.end_month, raw.end_day, period)

    for resolved in (start, end):
        if not period.contains(resolved):
            raise DateOutsidePeriod(
                f"{raw.start_month} {raw.start_day} {raw.end_month} {raw.end_day} "
                f"resolved to {resolved}, outside {period.start} to {period.end}"
            )

    if start > end:
        raise TransactionDateOrder(
            f"{raw.start_month} {raw.start_day} {raw.end_month} {raw.end_day} "
            f"ends before it starts: {start} > {end}"
        )

    return Transaction(
        card_number=card_suffix(card_key),
        start=start,
        end=end,
        amount=raw.amount,
        vendor=raw.vendor,
    )


def assemble(card_sections: Dict[str, List[str]], period: StatementPeriod,
             repository: Optional[TransactionRepository] = None) -> List[Transaction]:
    """
    Turn per-card line groups into transactions, in document order.

    Every line is resolved before anything is handed to ``repository``, so a
    statement that fails halfway is never partly stored.

    Args:
        card_sections: Output of split_by_card
        period: Statement period
        repository: Optional persistence collaborator

    Returns:
        Transactions, carrying their assigned ids when a repository was given
    """
    transactions = []
    for card_key, lines in card_sections.items():
        for line in lines:
            for raw in parse_line(line):
                transactions.append(build_transaction(card_key, raw, period))

    logger.info(f"Assembled {len(transactions)} transactions from {len(card_sections)} cards")

    if repository is None or not transactions:
        return transactions

    ids = repository.persist_many(transactions)
    logger.info(f"Persisted {len(ids)} transactions")
    return [
        txn.model_copy(update={"id": txn_id})
        for txn, txn_id in zip(transactions, ids)
    ]
