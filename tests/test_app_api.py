"""Tests for application wiring."""

import pytest

from crypto_portfolio.app import build_application
from crypto_portfolio.errors import TransactionIndexError


def test_actions_reach_the_store(tmp_path) -> None:
    """Intents sent through the actions reach the store and notify."""
    app = build_application(str(tmp_path / "local_storage.json"), fetch_coins=lambda: [])
    seen = []
    app.store.subscribe(lambda: seen.append(True))
    app.actions.add_transaction()
    assert len(app.store.get_portfolio()) == 1
    assert seen == [True]


def test_fetch_intent_updates_cache(tmp_path, coins_payload) -> None:
    """The fetch intent fills the coin cache."""
    app = build_application(str(tmp_path / "local_storage.json"), fetch_coins=lambda: coins_payload)
    app.actions.fetch_coins_data()
    assert len(app.store.get_coins_data().data) == 2


def test_fetch_intent_failure_is_logged_not_raised(tmp_path, caplog) -> None:
    """A failed fetch is logged and never reaches the caller."""
    from crypto_portfolio.errors import CoinsDataFetchError

    def failing():
        raise CoinsDataFetchError("offline")

    app = build_application(str(tmp_path / "local_storage.json"), fetch_coins=failing)
    app.actions.fetch_coins_data()
    assert app.store.get_coins_data().data == ()
    assert "offline" in caplog.text


def test_strict_indices_option(tmp_path) -> None:
    """build_application passes strict addressing through to the store."""
    app = build_application(str(tmp_path / "local_storage.json"), strict_indices=True)
    with pytest.raises(TransactionIndexError):
        app.actions.remove_transaction(0)
