"""Exceptions raised by the portfolio core and its services."""

from __future__ import annotations


class PortfolioError(Exception):
    """Base class for all portfolio errors."""


class TransactionIndexError(PortfolioError, IndexError):
    """A remove/edit intent addressed a row that does not exist (strict mode only)."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"transaction index {index} out of range for ledger of {size}")
        self.index = index
        self.size = size


class CoinsDataFetchError(PortfolioError):
    """The coin list could not be retrieved or decoded."""


class StorageError(PortfolioError):
    """Durable storage could not be written."""
