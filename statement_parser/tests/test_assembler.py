"""
Tests for assembling transactions from card sections.
"""
import pytest
from datetime import date
from decimal import Decimal

from ..core.assembler import assemble, build_transaction
from ..core.normalize import card_suffix
from ..core.sections import split_by_card
from ..errors import DateOutsidePeriod, InvalidTransactionDate, PersistenceError, TransactionDateOrder
from ..models.schema import RawMatch
from ..storage.repository import InMemoryRepository


class FailingRepository(InMemoryRepository):
    def persist_many(self, transactions):
        raise PersistenceError("database is down")


class TestCardSuffix:

    def test_masked_marker(self):
        assert card_suffix("1234 56XX XXXX 7890") == "7890"

    def test_surrounding_text(self):
        assert card_suffix(" 4111 11XX XXXX 0042 ") == "0042"


class TestAssemble:
    """Turning card sections into Transaction records."""

    def test_transactions_in_document_order(self, sample_text, cross_year_period):
        transactions = assemble(split_by_card(sample_text), cross_year_period)
        assert [(t.card_number, t.vendor) for t in transactions] == [
            ("7890", "NETFLIX"),
            ("7890", "GROCERY MART"),
            ("7890", "SPOTIFY"),
            ("7890", "BOOKSTORE"),
            ("3210", "COFFEE HOUSE"),
        ]

    def test_dates_resolved_across_new_year(self, sample_text, cross_year_period):
        netflix, grocery, spotify, bookstore, coffee = assemble(
            split_by_card(sample_text), cross_year_period
        )
        assert (netflix.start, netflix.end) == (date(2023, 12, 22), date(2023, 12, 23))
        assert (spotify.start, spotify.end) == (date(2024, 1, 5), date(2024, 1, 6))
        assert coffee.start == date(2024, 1, 2)

    def test_every_date_within_period(self, sample_text, cross_year_period):
        for txn in assemble(split_by_card(sample_text), cross_year_period):
            assert txn.start <= txn.end
            assert cross_year_period.contains(txn.start)
            assert cross_year_period.contains(txn.end)

    def test_unsaved_without_repository(self, sample_text, cross_year_period):
        transactions = assemble(split_by_card(sample_text), cross_year_period)
        assert all(t.id == 0 for t in transactions)
        assert transactions[0].amount == "-$45.67"
        assert transactions[0].decimal_amount == Decimal("-45.67")

    def test_repository_assigns_ids(self, sample_text, cross_year_period):
        repository = InMemoryRepository()
        transactions = assemble(split_by_card(sample_text), cross_year_period, repository)
        assert [t.id for t in transactions] == [1, 2, 3, 4, 5]
        assert repository.all_transactions() == transactions

    def test_date_outside_period(self, cross_year_period):
        """A date the resolver places outside the period is an error, not output."""
        sections = {"1234 56XX XXXX 7890": ["NOV 02 NOV 03 $5.00TOO EARLY"]}
        with pytest.raises(DateOutsidePeriod):
            assemble(sections, cross_year_period)

    def test_start_after_end_across_new_year(self, cross_year_period):
        """Both dates sit inside the period but the line ends before it starts."""
        sections = {"1234 56XX XXXX 7890": ["JAN 05 DEC 30 $9.99REVERSED"]}
        with pytest.raises(TransactionDateOrder):
            assemble(sections, cross_year_period)

    def test_start_after_end_same_year(self, march_period):
        sections = {"1234 56XX XXXX 7890": ["MAR 20 MAR 10 $9.99REVERSED"]}
        with pytest.raises(TransactionDateOrder):
            assemble(sections, march_period)

    def test_nothing_stored_when_a_line_fails(self, cross_year_period):
        repository = InMemoryRepository()
        sections = {
            "1234 56XX XXXX 7890": [
                "DEC 22 DEC 23-$45.67NETFLIX",
                "ABC 22 DEC 23 $1.00BROKEN",
            ]
        }
        with pytest.raises(InvalidTransactionDate):
            assemble(sections, cross_year_period, repository)
        assert repository.all_transactions() == []

    def test_persistence_error_propagates(self, sample_text, cross_year_period):
        with pytest.raises(PersistenceError):
            assemble(split_by_card(sample_text), cross_year_period, FailingRepository())

    def test_empty_sections(self, cross_year_period):
        assert assemble({}, cross_year_period, FailingRepository()) == []


class TestBuildTransaction:

    def test_single_match(self, cross_year_period):
        raw = RawMatch(start_month="DEC", start_day="22", end_month="DEC",
                       end_day="23", amount="-$45.67", vendor="NETFLIX")
        txn = build_transaction("1234 56XX XXXX 7890", raw, cross_year_period)
        assert txn.card_number == "7890"
        assert txn.start == date(2023, 12, 22)
        assert txn.end == date(2023, 12, 23)
        assert txn.budget_divider_id is None
