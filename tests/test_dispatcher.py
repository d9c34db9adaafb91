"""Tests for the message bus and intent creators."""

import pytest

from crypto_portfolio.dispatcher import Dispatcher, PortfolioActions
from crypto_portfolio.models import intents
from crypto_portfolio.models.intents import IntentName


def test_dispatch_requires_handler() -> None:
    """Dispatching before a handler is registered is an error."""
    with pytest.raises(RuntimeError):
        Dispatcher().dispatch(intents.AddTransaction())


def test_single_handler_only() -> None:
    """The bus accepts exactly one handler."""
    dispatcher = Dispatcher()
    dispatcher.register(lambda intent: None)
    with pytest.raises(RuntimeError):
        dispatcher.register(lambda intent: None)


def test_nested_dispatch_is_serialized() -> None:
    """An intent dispatched from inside a handler runs after the current one finishes."""
    dispatcher = Dispatcher()
    log = []

    def handler(intent) -> None:
        log.append(f"start {intent.name.value}")
        if isinstance(intent, intents.AddTransaction):
            dispatcher.dispatch(intents.SaveTransaction())
        log.append(f"end {intent.name.value}")

    dispatcher.register(handler)
    dispatcher.dispatch(intents.AddTransaction())
    assert log == [
        "start ADD_TRANSACTION",
        "end ADD_TRANSACTION",
        "start SAVE_TRANSACTION",
        "end SAVE_TRANSACTION",
    ]


def test_actions_emit_named_intents() -> None:
    """Each action method emits the intent of the same name with its payload."""
    dispatcher = Dispatcher()
    received = []
    dispatcher.register(received.append)
    actions = PortfolioActions(dispatcher)

    actions.add_transaction()
    actions.remove_transaction(1)
    actions.edit_transaction(2)
    actions.transaction_coin_changed(None)
    actions.transaction_units_changed("3")
    actions.transaction_initial_price_changed("4")
    actions.save_transaction()
    actions.cancel_transaction()
    actions.fetch_coins_data()

    assert [i.name for i in received] == list(IntentName)
    assert received[1] == intents.RemoveTransaction(1)
    assert received[2] == intents.EditTransaction(2)
    assert received[3] == intents.TransactionCoinChanged(None)
    assert received[4].text == "3"
    assert received[5].text == "4"
