"""
SQLAlchemy tables and repository for parsed transactions.

Usage
-----
repo = SqlTransactionRepository("sqlite:///budget.db")
repo.create_schema()
ids = repo.persist_many(transactions)
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from ..errors import PersistenceError
from ..models.schema import Transaction


class Base(DeclarativeBase):
    pass


class BudgetDividerRow(Base):
    __tablename__ = "budget_divider"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    max_budget: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class TransactionRow(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_number: Mapped[str] = mapped_column(String(4), nullable=False, index=True)
    start: Mapped[date] = mapped_column(Date, nullable=False)
    end: Mapped[date] = mapped_column(Date, nullable=False)
    # Kept as printed ("-$45.67"), not as a number.
    amount: Mapped[str] = mapped_column(String(20), nullable=False)
    vendor: Mapped[str] = mapped_column(String(255), nullable=False)
    budget_divider_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("budget_divider.id", ondelete="SET NULL"),
        nullable=True,
    )

    def assign(self, t: Transaction) -> None:
        self.card_number = t.card_number
        self.start = t.start
        self.end = t.end
        self.amount = t.amount
        self.vendor = t.vendor
        self.budget_divider_id = t.budget_divider_id

    def to_model(self) -> Transaction:
        return Transaction(
            id=self.id,
            card_number=self.card_number,
            start=self.start,
            end=self.end,
            amount=self.amount,
            vendor=self.vendor,
            budget_divider_id=self.budget_divider_id,
        )


class SqlTransactionRepository:
    """Transaction repository on top of any SQLAlchemy database URL."""

    def __init__(self, database_url: str):
        self.engine = create_engine(database_url, pool_pre_ping=True)
        self._session_maker = sessionmaker(bind=self.engine, expire_on_commit=False, class_=Session)

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around a series of operations."""

        session = self._session_maker()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise PersistenceError(f"Database error: {exc}") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _persist(self, session: Session, t: Transaction) -> int:
        if t.id == 0:
            row = TransactionRow()
            row.assign(t)
            session.add(row)
            session.flush()
            return row.id

        row = session.get(TransactionRow, t.id)
        if row is None:
            raise PersistenceError(f"No transaction found with id={t.id}")
        row.assign(t)
        return t.id

    def persist(self, transaction: Transaction) -> int:
        with self.session_scope() as s:
            return self._persist(s, transaction)

    def persist_many(self, transactions: Sequence[Transaction]) -> list[int]:
        """Insert or update all transactions in a single database transaction."""

        with self.session_scope() as s:
            return [self._persist(s, t) for t in transactions]

    def all_transactions(self) -> list[Transaction]:
        with self.session_scope() as s:
            rows = s.scalars(select(TransactionRow).order_by(TransactionRow.id))
            return [row.to_model() for row in rows]

    def transactions_by_card(self, card_number: str) -> list[Transaction]:
        stmt = (
            select(TransactionRow)
            .where(TransactionRow.card_number == card_number)
            .order_by(TransactionRow.id)
        )
        with self.session_scope() as s:
            return [row.to_model() for row in s.scalars(stmt)]

    def transactions_by_card_and_range(
        self, card_number: str, start: date, end: date
    ) -> list[Transaction]:
        stmt = (
            select(TransactionRow)
            .where(
                TransactionRow.card_number == card_number,
                TransactionRow.start.between(start, end),
                TransactionRow.end.between(start, end),
            )
            .order_by(TransactionRow.id)
        )
        with self.session_scope() as s:
            return [row.to_model() for row in s.scalars(stmt)]

    def lookup_divider_id(self, name: str) -> int | None:
        stmt = select(BudgetDividerRow.id).where(BudgetDividerRow.name == name).limit(1)
        with self.session_scope() as s:
            return s.scalars(stmt).first()
