"""
Exception types raised while extracting, parsing and storing statements.
"""


class StatementError(Exception):
    """Base class for every error raised by this package."""


class StatementParseError(StatementError):
    """The statement text could not be turned into transactions."""


class MissingStatementPeriod(StatementParseError):
    """No ``STATEMENT PERIOD`` line was found."""


class AmbiguousStatementPeriod(StatementParseError):
    """More than one ``STATEMENT PERIOD`` line was found."""


class InvalidPeriod(StatementParseError):
    """The billing period is not a valid date range."""


class InvalidTransactionDate(StatementParseError):
    """A transaction line carries a month or day that is not a calendar date."""


class TransactionDateOrder(StatementParseError):
    """A transaction line ends before it starts."""


class DateOutsidePeriod(StatementParseError):
    """A resolved transaction date does not fall inside the statement period."""


class ExtractionError(StatementError):
    """The uploaded document could not be converted to text."""


class PersistenceError(StatementError):
    """Storing or loading transactions failed."""
