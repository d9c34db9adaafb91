"""Message bus delivering intents to the store, and the intent creators views call."""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Optional

from crypto_portfolio.models import intents

logger = logging.getLogger(__name__)

Handler = Callable[[intents.Intent], None]


class Dispatcher:
    """
    Delivers intents to a single registered handler, one at a time.

    An intent dispatched while another is being handled (for example from a
    change listener) is queued and delivered once the current one completes.
    """

    def __init__(self) -> None:
        self._handler: Optional[Handler] = None
        self._queue: Deque[intents.Intent] = deque()
        self._dispatching = False

    def register(self, handler: Handler) -> None:
        if self._handler is not None:
            raise RuntimeError("Dispatcher already has a handler registered")
        self._handler = handler

    def dispatch(self, intent: intents.Intent) -> None:
        if self._handler is None:
            raise RuntimeError(f"No handler registered for {intent.name.value}")
        logger.debug("Dispatching %s", intent.name.value)
        self._queue.append(intent)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                self._handler(self._queue.popleft())
        finally:
            self._dispatching = False
            self._queue.clear()


class PortfolioActions:
    """Intent creators: one method per intent name."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    def add_transaction(self) -> None:
        self.dispatcher.dispatch(intents.AddTransaction())

    def remove_transaction(self, index: int) -> None:
        self.dispatcher.dispatch(intents.RemoveTransaction(index))

    def edit_transaction(self, index: int) -> None:
        self.dispatcher.dispatch(intents.EditTransaction(index))

    def transaction_coin_changed(self, coin_id: Optional[str]) -> None:
        self.dispatcher.dispatch(intents.TransactionCoinChanged(coin_id))

    def transaction_units_changed(self, text: str) -> None:
        self.dispatcher.dispatch(intents.TransactionUnitsChanged(text))

    def transaction_initial_price_changed(self, text: str) -> None:
        self.dispatcher.dispatch(intents.TransactionInitialPriceChanged(text))

    def save_transaction(self) -> None:
        self.dispatcher.dispatch(intents.SaveTransaction())

    def cancel_transaction(self) -> None:
        self.dispatcher.dispatch(intents.CancelTransaction())

    def fetch_coins_data(self) -> None:
        self.dispatcher.dispatch(intents.FetchCoinsData())
