"""Crypto Portfolio: transaction ledger, validation and valuation metrics for crypto lots."""

__version__ = "0.1.0"
