"""
End-to-end parsing orchestration.
"""
from pathlib import Path
from typing import List, Optional, Union
import logging

from .assembler import assemble
from .loader import extract_text
from .period import extract_period
from .sections import split_by_card
from ..models.schema import StatementResult, Transaction
from ..storage.repository import TransactionRepository

logger = logging.getLogger(__name__)


class StatementParser:
    """Runs the parsing pipeline and optionally stores the result."""

    def __init__(self, repository: Optional[TransactionRepository] = None, verbose: bool = False):
        self.repository = repository
        self.verbose = verbose

        if verbose:
            logging.basicConfig(level=logging.DEBUG)

    def parse(self, text: str) -> StatementResult:
        """
        Parse statement text without storing anything.

        Args:
            text: Plain text of the statement

        Returns:
            StatementResult with the period and unsaved transactions
        """
        period = extract_period(text)
        sections = split_by_card(text)
        return StatementResult(period=period, transactions=assemble(sections, period))

    def ingest_text(self, text: str) -> StatementResult:
        """
        Parse statement text and hand the transactions to the repository.

        The period is established before anything is stored, so a statement
        without one never reaches the repository.
        """
        period = extract_period(text)
        sections = split_by_card(text)
        transactions = assemble(sections, period, self.repository)
        return StatementResult(period=period, transactions=transactions)

    def ingest_pdf(self, document: Union[bytes, Path]) -> StatementResult:
        """Extract the text of a PDF statement, then :meth:`ingest_text` it."""
        return self.ingest_text(extract_text(document))


def parse_statement(text: str) -> List[Transaction]:
    """
    Parse the plain text of a statement into transactions.

    Args:
        text: Plain text of the statement

    Returns:
        Transactions in document order, none of them persisted
    """
    return StatementParser().parse(text).transactions
