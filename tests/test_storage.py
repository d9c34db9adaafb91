"""Tests for durable key-value storage and the coins-data cache."""

import json

from crypto_portfolio.config.constants import COINS_DATA_STORAGE_KEY
from crypto_portfolio.services.storage import KeyValueStorage, load_coins_data, save_coins_data


def test_missing_file_reads_empty(tmp_path) -> None:
    """A storage file that does not exist reads as empty."""
    kv = KeyValueStorage(str(tmp_path / "missing.json"))
    assert kv.get_item("anything") is None


def test_set_and_get(tmp_path) -> None:
    """Items written under different keys read back independently."""
    kv = KeyValueStorage(str(tmp_path / "kv.json"))
    kv.set_item("a", "1")
    kv.set_item("b", "2")
    kv.set_item("a", "3")
    assert kv.get_item("a") == "3"
    assert kv.get_item("b") == "2"


def test_values_survive_new_instance(tmp_path) -> None:
    """Values persist across storage instances on the same file."""
    path = str(tmp_path / "kv.json")
    KeyValueStorage(path).set_item("k", "v")
    assert KeyValueStorage(path).get_item("k") == "v"


def test_corrupt_file_reads_empty(tmp_path) -> None:
    """An unreadable storage file reads as empty."""
    path = tmp_path / "kv.json"
    path.write_text("{not json", encoding="utf-8")
    kv = KeyValueStorage(str(path))
    assert kv.get_item(COINS_DATA_STORAGE_KEY) is None
    assert load_coins_data(kv).data == ()


def test_coins_data_written_verbatim(tmp_path, coins_payload) -> None:
    """The coin payload is stored as JSON and parsed on read."""
    kv = KeyValueStorage(str(tmp_path / "kv.json"))
    save_coins_data(kv, coins_payload)
    assert json.loads(kv.get_item(COINS_DATA_STORAGE_KEY)) == coins_payload
    coins_data = load_coins_data(kv)
    assert coins_data.added_at == "2024-01-01T00:00:00Z"
    assert [c.symbol for c in coins_data.data] == ["BTC", "ETH"]
    assert coins_data.find("eth").price == 10.0


def test_coins_data_default_when_absent(tmp_path) -> None:
    """No cached coins gives an empty default."""
    coins_data = load_coins_data(KeyValueStorage(str(tmp_path / "kv.json")))
    assert coins_data.added_at is None
    assert coins_data.data == ()


def test_coins_data_accepts_bare_list(tmp_path) -> None:
    """A bare list of coins is accepted with no timestamp."""
    kv = KeyValueStorage(str(tmp_path / "kv.json"))
    save_coins_data(kv, [{"id": "ada", "name": "Cardano", "symbol": "ADA", "price": "0.5"}])
    coins_data = load_coins_data(kv)
    assert coins_data.added_at is None
    assert coins_data.find("ada").price == 0.5
