"""Transaction persistence."""

from .repository import DividerLookup, InMemoryRepository, TransactionRepository

__all__ = ["DividerLookup", "InMemoryRepository", "TransactionRepository"]
