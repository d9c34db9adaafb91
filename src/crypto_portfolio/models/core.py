"""Typed structures for the transaction ledger, coin reference data and metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, TypedDict


class TransactionMetrics(TypedDict):
    """Derived metrics for one lot as returned by compute_transaction_metrics."""

    total_invested: float
    current_value: float
    profit: float
    margin: float


class PortfolioTotals(TypedDict):
    """Aggregate metrics over all committed lots."""

    total_invested: float
    current_value: float
    profit: float
    margin: float


def empty_metrics() -> TransactionMetrics:
    return {"total_invested": 0.0, "current_value": 0.0, "profit": 0.0, "margin": 0.0}


@dataclass(frozen=True)
class Coin:
    """One record of the external coin list."""

    id: str
    name: str = ""
    symbol: str = ""
    price: Optional[float] = None
    last_updated: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Coin":
        price = raw.get("price")
        try:
            price = float(price) if price is not None else None
        except (TypeError, ValueError, OverflowError):
            price = None
        if price is not None and not math.isfinite(price):
            price = None
        return cls(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            symbol=str(raw.get("symbol") or ""),
            price=price,
            last_updated=raw.get("last_updated"),
        )

    @property
    def label(self) -> str:
        return f"{self.name} ({self.symbol})"


@dataclass(frozen=True)
class CoinRef:
    """The coin a transaction points at. All fields empty means no coin selected."""

    id: str = ""
    label: str = ""
    symbol: str = ""

    @property
    def is_set(self) -> bool:
        return bool(self.id or self.symbol or self.label)


@dataclass(frozen=True)
class CoinsData:
    """Cached coin list plus the time the server collected it."""

    added_at: Optional[str] = None
    data: Tuple[Coin, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "CoinsData":
        """Build from the endpoint payload: {"added_at", "data"} or a bare list of coins."""
        if isinstance(payload, list):
            return cls(data=tuple(Coin.from_dict(c) for c in payload if isinstance(c, dict)))
        if isinstance(payload, dict):
            raw = payload.get("data")
            if not isinstance(raw, list):
                raw = []
            return cls(
                added_at=payload.get("added_at"),
                data=tuple(Coin.from_dict(c) for c in raw if isinstance(c, dict)),
            )
        return cls()

    @staticmethod
    def is_payload(payload: Any) -> bool:
        """True for a bare list of coins or a dict whose "data" is a list."""
        if isinstance(payload, list):
            return True
        return isinstance(payload, dict) and isinstance(payload.get("data"), list)

    def find(self, coin_id: Optional[str]) -> Optional[Coin]:
        if not coin_id:
            return None
        return next((c for c in self.data if c.id == coin_id), None)


@dataclass(frozen=True)
class TransactionSnapshot:
    """Committed field values captured when a row enters edit mode."""

    coin: CoinRef
    units: str
    initial_price: str


@dataclass
class Transaction:
    """One lot purchase.

    units and initial_price are kept as the text the user typed; metrics are
    derived from them on commit and are never edited directly.
    """

    coin: CoinRef = field(default_factory=CoinRef)
    units: str = ""
    initial_price: str = ""
    edit_mode: bool = True
    is_coin_valid: bool = False
    is_units_valid: bool = False
    is_initial_price_valid: bool = False
    current_price: float = 0.0
    metrics: TransactionMetrics = field(default_factory=empty_metrics)

    @property
    def is_valid(self) -> bool:
        return self.is_coin_valid and self.is_units_valid and self.is_initial_price_valid

    @property
    def total_invested(self) -> float:
        return self.metrics["total_invested"]

    @property
    def current_value(self) -> float:
        return self.metrics["current_value"]

    @property
    def profit(self) -> float:
        return self.metrics["profit"]

    @property
    def margin(self) -> float:
        return self.metrics["margin"]

    def snapshot(self) -> TransactionSnapshot:
        return TransactionSnapshot(coin=self.coin, units=self.units, initial_price=self.initial_price)

    def copy(self) -> "Transaction":
        return Transaction(
            coin=self.coin,
            units=self.units,
            initial_price=self.initial_price,
            edit_mode=self.edit_mode,
            is_coin_valid=self.is_coin_valid,
            is_units_valid=self.is_units_valid,
            is_initial_price_valid=self.is_initial_price_valid,
            current_price=self.current_price,
            metrics=dict(self.metrics),  # type: ignore[misc]
        )


@dataclass(frozen=True)
class Portfolio:
    """Read-only view of the ledger handed out by the store."""

    transactions: Tuple[Transaction, ...] = ()

    def __len__(self) -> int:
        return len(self.transactions)

    def committed(self) -> List[Transaction]:
        return [t for t in self.transactions if not t.edit_mode]
