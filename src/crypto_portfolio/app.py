"""Application bootstrap for Crypto Portfolio.

The application root builds the storage, the store and the message bus once
at startup and hands references to whoever needs them; there is no module
level store instance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from crypto_portfolio.config.constants import STORAGE_FILE
from crypto_portfolio.config.logging import setup_logging
from crypto_portfolio.dispatcher import Dispatcher, PortfolioActions
from crypto_portfolio.services import pricing
from crypto_portfolio.services.storage import KeyValueStorage
from crypto_portfolio.store import PortfolioStore
from crypto_portfolio.ui.keyboard import KeyboardListeners
from crypto_portfolio.ui.transaction import TransactionEditController

logger = logging.getLogger(__name__)


@dataclass
class Application:
    storage: KeyValueStorage
    store: PortfolioStore
    dispatcher: Dispatcher
    actions: PortfolioActions
    keyboard: KeyboardListeners

    def row_controller(self, index: int) -> TransactionEditController:
        """Create and mount the controller for the row at index."""
        controller = TransactionEditController(index, self.store, self.actions, self.keyboard)
        controller.mount()
        return controller


def build_application(
    storage_path: str = STORAGE_FILE,
    fetch_coins: Optional[Callable[[], Any]] = None,
    strict_indices: bool = False,
) -> Application:
    """Wire storage, store, dispatcher and actions together.

    Args:
        storage_path: JSON file backing the durable key-value storage.
        fetch_coins: Coin list retrieval; defaults to the HTTP endpoint.
        strict_indices: Raise on out-of-range remove/edit instead of ignoring.
    """
    storage = KeyValueStorage(storage_path)
    store = PortfolioStore(
        storage,
        fetch_coins=fetch_coins or pricing.fetch_coins_payload,
        strict_indices=strict_indices,
    )
    dispatcher = Dispatcher()
    dispatcher.register(store.handle)
    return Application(
        storage=storage,
        store=store,
        dispatcher=dispatcher,
        actions=PortfolioActions(dispatcher),
        keyboard=KeyboardListeners(),
    )


def main() -> None:
    """Refresh the coin cache and report what is cached."""
    setup_logging()
    app = build_application()
    app.actions.fetch_coins_data()
    coins_data = app.store.get_coins_data()
    logger.info("%d coins available (added_at=%s)", len(coins_data.data), coins_data.added_at)


if __name__ == "__main__":
    main()
