"""Per-lot and portfolio metrics computation (pure functions).

Values are kept at full precision; rounding is a display concern.
"""

from __future__ import annotations

from typing import Iterable

from crypto_portfolio.models.core import PortfolioTotals, Transaction, TransactionMetrics


def total_invested(units: float, initial_price: float) -> float:
    return units * initial_price


def current_value(units: float, current_price: float) -> float:
    return units * current_price


def profit(current_value_: float, total_invested_: float) -> float:
    return current_value_ - total_invested_


def margin(profit_: float, total_invested_: float) -> float:
    """Profit as a percentage of the amount invested; 0.0 when nothing was invested."""
    if total_invested_ == 0:
        return 0.0
    return profit_ / total_invested_ * 100.0


def compute_transaction_metrics(
    units: float,
    initial_price: float,
    current_price: float,
) -> TransactionMetrics:
    """
    Compute derived metrics for one lot.

    Args:
        units: Committed quantity.
        initial_price: Committed purchase price per unit.
        current_price: Latest known market price per unit (0.0 if unknown).

    Returns:
        Dict with total_invested, current_value, profit and margin (percent).
    """
    invested = total_invested(units, initial_price)
    value = current_value(units, current_price)
    pnl = profit(value, invested)
    return {
        "total_invested": invested,
        "current_value": value,
        "profit": pnl,
        "margin": margin(pnl, invested),
    }


def compute_portfolio_totals(transactions: Iterable[Transaction]) -> PortfolioTotals:
    """Sum the committed metrics of all lots.

    A row being edited contributes its last committed values; a row that was
    never saved contributes zeros.
    """
    invested = 0.0
    value = 0.0
    for t in transactions:
        invested += t.metrics["total_invested"]
        value += t.metrics["current_value"]
    pnl = profit(value, invested)
    return {
        "total_invested": invested,
        "current_value": value,
        "profit": pnl,
        "margin": margin(pnl, invested),
    }
