"""Pytest configuration: ensure src is on path when running tests from repo root."""

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
_src = _root / "src"
if _src.is_dir() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from crypto_portfolio.services.storage import KeyValueStorage, save_coins_data  # noqa: E402
from crypto_portfolio.store import PortfolioStore  # noqa: E402

COINS_PAYLOAD = {
    "added_at": "2024-01-01T00:00:00Z",
    "data": [
        {"id": "btc", "name": "Bitcoin", "symbol": "BTC", "price": 150.0, "last_updated": "2024-01-01T00:00:00Z"},
        {"id": "eth", "name": "Ethereum", "symbol": "ETH", "price": 10.0, "last_updated": "2024-01-01T00:00:00Z"},
    ],
}


@pytest.fixture
def coins_payload() -> dict:
    return COINS_PAYLOAD


@pytest.fixture
def storage(tmp_path) -> KeyValueStorage:
    """Durable storage in a temp dir with the coin list already cached."""
    kv = KeyValueStorage(str(tmp_path / "local_storage.json"))
    save_coins_data(kv, COINS_PAYLOAD)
    return kv


@pytest.fixture
def store(storage) -> PortfolioStore:
    return PortfolioStore(storage, fetch_coins=lambda: COINS_PAYLOAD)


@pytest.fixture
def changes(store) -> list:
    """Records one entry per change notification emitted by the store."""
    seen: list = []
    store.subscribe(lambda: seen.append(len(store.get_portfolio())))
    return seen
