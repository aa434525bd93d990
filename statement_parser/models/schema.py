"""
Pydantic models for parsed card statement data.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class StatementPeriod(BaseModel):
    """Billing cycle covered by one statement."""
    start: date
    end: date

    @property
    def crosses_year(self) -> bool:
        return self.start.year != self.end.year

    def contains(self, day: date) -> bool:
        """Return True if ``day`` falls inside the period (both ends inclusive)."""
        return self.start <= day <= self.end


class CardSection(BaseModel):
    """All text lines that follow one card marker."""
    card_key: str
    lines: List[str] = Field(default_factory=list)


class RawMatch(BaseModel):
    """Fields captured from a single transaction line, still as text."""
    start_month: str
    start_day: str
    end_month: str
    end_day: str
    amount: str
    vendor: str


class Transaction(BaseModel):
    """A finalized, persistable charge."""
    id: int = 0  # 0 means "not persisted yet"
    card_number: str = Field(pattern=r"^\d{4}$")
    start: date
    end: date
    amount: str
    vendor: str
    budget_divider_id: Optional[int] = None

    @property
    def decimal_amount(self) -> Decimal:
        """The amount as a signed Decimal, with the currency sign dropped."""
        return Decimal(self.amount.replace("$", "").replace(",", ""))

    @field_validator("amount")
    def validate_amount(cls, v):
        """Amounts keep their textual form but must still be numeric."""
        if not v or not any(ch.isdigit() for ch in v):
            raise ValueError(f"Transaction amount is not numeric: {v!r}")
        return v

    @model_validator(mode="after")
    def validate_date_order(self):
        if self.start > self.end:
            raise ValueError(
                f"Transaction starts after it ends: {self.start} > {self.end}"
            )
        return self


class BudgetDivider(BaseModel):
    """Categorization bucket a transaction may be linked to."""
    id: int = 0
    name: str
    description: Optional[str] = None
    max_budget: int = 0


class StatementResult(BaseModel):
    """Outcome of one parsed statement."""
    period: StatementPeriod
    transactions: List[Transaction]

    def by_card(self) -> dict:
        """Group transactions by card number, keeping their original order."""
        grouped = {}
        for txn in self.transactions:
            grouped.setdefault(txn.card_number, []).append(txn)
        return grouped
