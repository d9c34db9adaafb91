"""Coin list retrieval and price lookup."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from crypto_portfolio.config.constants import COINS_API_URL, HTTP_TIMEOUT_SECONDS
from crypto_portfolio.errors import CoinsDataFetchError
from crypto_portfolio.models.core import CoinRef, CoinsData


def fetch_coins_payload(url: str = COINS_API_URL, timeout: float = HTTP_TIMEOUT_SECONDS) -> Any:
    """
    Fetch the coin list from the coins endpoint.

    Returns:
        The decoded JSON payload, untouched.

    Raises:
        CoinsDataFetchError: on network errors, non-2xx status or invalid JSON.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise CoinsDataFetchError(f"Error fetching coins data from {url}: {e}") from e
    except ValueError as e:
        raise CoinsDataFetchError(f"Invalid coins data from {url}: {e}") from e


def get_current_price(coins_data: CoinsData, coin_id: Optional[str]) -> float:
    """Latest known price for a coin id, 0.0 when the coin or its price is unknown."""
    coin = coins_data.find(coin_id)
    if coin is None or coin.price is None:
        return 0.0
    return coin.price


def resolve_coin(coins_data: CoinsData, coin_id: Optional[str]) -> CoinRef:
    """
    Turn a picked coin id into the reference stored on a transaction.

    Unknown ids keep the id as their label so the selection is not lost;
    None (picker cleared) gives an unset reference.
    """
    if not coin_id:
        return CoinRef()
    coin = coins_data.find(coin_id)
    if coin is None:
        return CoinRef(id=coin_id, label=coin_id)
    return CoinRef(id=coin.id, label=coin.label, symbol=coin.symbol)


def coins_for_select(coins_data: CoinsData) -> List[Dict[str, str]]:
    """Options for the coin picker: id, "Name (SYMBOL)" label and symbol."""
    return [
        {"id": coin.id, "label": coin.label, "symbol": coin.symbol}
        for coin in coins_data.data
    ]
