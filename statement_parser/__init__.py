"""
Card Statement Parser

Turns the plain text of a credit card statement into dated, per-card
transaction records ready to be stored.
"""

__version__ = "1.0.0"

from .core.runner import parse_statement, StatementParser
from .core.loader import extract_text
from .errors import (
    StatementError,
    StatementParseError,
    MissingStatementPeriod,
    AmbiguousStatementPeriod,
    InvalidPeriod,
    InvalidTransactionDate,
    DateOutsidePeriod,
    TransactionDateOrder,
    ExtractionError,
    PersistenceError,
)
from .models.schema import StatementPeriod, CardSection, RawMatch, Transaction, BudgetDivider, StatementResult

__all__ = [
    "parse_statement",
    "StatementParser",
    "extract_text",
    "StatementError",
    "StatementParseError",
    "MissingStatementPeriod",
    "AmbiguousStatementPeriod",
    "InvalidPeriod",
    "InvalidTransactionDate",
    "DateOutsidePeriod",
    "TransactionDateOrder",
    "ExtractionError",
    "PersistenceError",
    "StatementPeriod",
    "CardSection",
    "RawMatch",
    "Transaction",
    "BudgetDivider",
    "StatementResult",
]
