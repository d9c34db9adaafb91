"""Field validation for transaction rows (pure functions).

Validation runs on every field change, not only on save, so rows can show
live validity indicators.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from crypto_portfolio.models.core import CoinRef

_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def parse_positive_decimal(text: Optional[str]) -> Optional[float]:
    """
    Parse user-typed text as a strictly positive finite decimal.

    Only plain decimal literals are accepted (no "inf", "nan", or "1_000").
    Surrounding whitespace is ignored.

    Returns:
        The parsed value, or None if the text is not acceptable.
    """
    if text is None:
        return None
    stripped = str(text).strip()
    if not _DECIMAL_RE.match(stripped):
        return None
    value = float(stripped)
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def is_coin_valid(coin: Optional[CoinRef]) -> bool:
    """A coin is valid once any of its id, symbol or label is set."""
    return coin is not None and coin.is_set


def is_units_valid(text: Optional[str]) -> bool:
    return parse_positive_decimal(text) is not None


def is_initial_price_valid(text: Optional[str]) -> bool:
    return parse_positive_decimal(text) is not None
