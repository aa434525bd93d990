"""
Persistence contracts and an in-memory implementation.

The parser only depends on :class:`TransactionRepository`; the SQL backed
implementation lives in :mod:`statement_parser.storage.sql`.
"""
from datetime import date
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from ..errors import PersistenceError
from ..models.schema import BudgetDivider, Transaction


class TransactionRepository(Protocol):
    """Insert-or-update store for transactions, keyed by id (0 = insert)."""

    def persist(self, transaction: Transaction) -> int: ...

    def persist_many(self, transactions: Sequence[Transaction]) -> List[int]: ...

    def all_transactions(self) -> List[Transaction]: ...

    def transactions_by_card(self, card_number: str) -> List[Transaction]: ...

    def transactions_by_card_and_range(self, card_number: str, start: date,
                                       end: date) -> List[Transaction]: ...


class DividerLookup(Protocol):
    def lookup_divider_id(self, name: str) -> Optional[int]: ...


class InMemoryRepository:
    """Dictionary backed repository, mostly for tests and dry runs."""

    def __init__(self, dividers: Iterable[BudgetDivider] = ()):
        self._transactions: Dict[int, Transaction] = {}
        self._next_id = 1
        self._dividers = list(dividers)

    def persist(self, transaction: Transaction) -> int:
        if transaction.id == 0:
            txn_id = self._next_id
            self._next_id += 1
        elif transaction.id in self._transactions:
            txn_id = transaction.id
        else:
            raise PersistenceError(f"No transaction found with id={transaction.id}")

        self._transactions[txn_id] = transaction.model_copy(update={"id": txn_id})
        return txn_id

    def persist_many(self, transactions: Sequence[Transaction]) -> List[int]:
        return [self.persist(txn) for txn in transactions]

    def all_transactions(self) -> List[Transaction]:
        return list(self._transactions.values())

    def transactions_by_card(self, card_number: str) -> List[Transaction]:
        return [t for t in self._transactions.values() if t.card_number == card_number]

    def transactions_by_card_and_range(self, card_number: str, start: date,
                                       end: date) -> List[Transaction]:
        return [
            t for t in self.transactions_by_card(card_number)
            if start <= t.start <= end and start <= t.end <= end
        ]

    def lookup_divider_id(self, name: str) -> Optional[int]:
        for divider in self._dividers:
            if divider.name == name:
                return divider.id
        return None
