"""Tests for field validation."""

import pytest

from crypto_portfolio.models.core import CoinRef
from crypto_portfolio.services.validation import (
    is_coin_valid,
    is_initial_price_valid,
    is_units_valid,
    parse_positive_decimal,
)


@pytest.mark.parametrize("text", ["1", "2", "0.5", ".5", "5.", "100.25", "1e3", "+3", " 42 ", "0.00000001"])
def test_accepts_strictly_positive_decimals(text: str) -> None:
    """Plain positive decimal literals are valid for units and price."""
    assert is_units_valid(text)
    assert is_initial_price_valid(text)


@pytest.mark.parametrize(
    "text",
    ["", "   ", "0", "0.0", "-1", "-0.5", "abc", "1,5", "1.2.3", "inf", "Infinity", "nan", "1e999", "1_000", "0x10", None],
)
def test_rejects_everything_else(text) -> None:
    """Empty, zero, negative, non-numeric and non-finite text is invalid."""
    assert not is_units_valid(text)
    assert not is_initial_price_valid(text)


def test_parse_positive_decimal_returns_value() -> None:
    """Accepted text parses to its float value."""
    assert parse_positive_decimal("2") == pytest.approx(2.0)
    assert parse_positive_decimal(" 1.5e2 ") == pytest.approx(150.0)
    assert parse_positive_decimal("-2") is None


def test_coin_valid_when_any_identity_field_set() -> None:
    """Any of id, symbol or label makes the coin valid."""
    assert is_coin_valid(CoinRef(id="btc"))
    assert is_coin_valid(CoinRef(symbol="BTC"))
    assert is_coin_valid(CoinRef(label="Bitcoin (BTC)"))


def test_coin_invalid_when_unset() -> None:
    """An empty or missing coin is invalid."""
    assert not is_coin_valid(CoinRef())
    assert not is_coin_valid(None)
