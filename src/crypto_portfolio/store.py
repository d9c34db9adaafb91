"""PortfolioStore: the single writer of the transaction ledger.

The store applies intents one at a time, keeps validity flags and derived
metrics in step with the ledger, and emits a "change" notification after
every intent that mutated state. Subscribers re-read the full state through
get_portfolio() / get_coins_data() rather than receiving a diff.

At most one row is in edit mode. Starting a new edit (add or edit) while
another row is being edited first cancels that edit, exactly as the cancel
intent would.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Optional, Set

from crypto_portfolio.errors import CoinsDataFetchError, PortfolioError, TransactionIndexError
from crypto_portfolio.models import intents
from crypto_portfolio.models.core import (
    CoinsData,
    Portfolio,
    PortfolioTotals,
    Transaction,
    TransactionSnapshot,
    empty_metrics,
)
from crypto_portfolio.services import metrics as metrics_service
from crypto_portfolio.services import pricing as pricing_service
from crypto_portfolio.services import storage as storage_service
from crypto_portfolio.services import validation

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class PortfolioStore:
    """
    Holds the ledger for one session.

    Args:
        storage: Durable key-value storage holding the coins-data cache.
        fetch_coins: Blocking callable returning the coin list payload; run in
            a worker thread by refresh_coins_data().
        strict_indices: Raise TransactionIndexError on out-of-range remove/edit
            instead of ignoring the intent.
    """

    def __init__(
        self,
        storage: storage_service.KeyValueStorage,
        fetch_coins: Callable[[], Any] = pricing_service.fetch_coins_payload,
        strict_indices: bool = False,
    ) -> None:
        self._storage = storage
        self._fetch_coins = fetch_coins
        self._strict_indices = strict_indices
        self._transactions: List[Transaction] = []
        self._snapshot: Optional[TransactionSnapshot] = None
        self._listeners: List[Listener] = []
        self._pending: Set[asyncio.Task] = set()

    # --- subscriptions ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit_change(self) -> None:
        for listener in list(self._listeners):
            listener()

    # --- reads ---

    def get_portfolio(self) -> Portfolio:
        return Portfolio(transactions=tuple(t.copy() for t in self._transactions))

    def get_coins_data(self) -> CoinsData:
        return storage_service.load_coins_data(self._storage)

    def get_totals(self) -> PortfolioTotals:
        return metrics_service.compute_portfolio_totals(self._transactions)

    def get_editing_index(self) -> Optional[int]:
        return next((i for i, t in enumerate(self._transactions) if t.edit_mode), None)

    # --- intents ---

    def handle(self, intent: intents.Intent) -> None:
        """Apply one intent. This is the handler registered with the dispatcher."""
        logger.debug("Handling %s", intent)
        if isinstance(intent, intents.AddTransaction):
            self.add_transaction()
        elif isinstance(intent, intents.RemoveTransaction):
            self.remove_transaction(intent.index)
        elif isinstance(intent, intents.EditTransaction):
            self.edit_transaction(intent.index)
        elif isinstance(intent, intents.TransactionCoinChanged):
            self.transaction_coin_changed(intent.coin_id)
        elif isinstance(intent, intents.TransactionUnitsChanged):
            self.transaction_units_changed(intent.text)
        elif isinstance(intent, intents.TransactionInitialPriceChanged):
            self.transaction_initial_price_changed(intent.text)
        elif isinstance(intent, intents.SaveTransaction):
            self.save_transaction()
        elif isinstance(intent, intents.CancelTransaction):
            self.cancel_transaction()
        elif isinstance(intent, intents.FetchCoinsData):
            self.fetch_coins_data()
        else:
            raise TypeError(f"Unknown intent: {intent!r}")

    def add_transaction(self) -> None:
        """Append an empty row in edit mode."""
        self._discard_edit()
        self._transactions.append(Transaction())
        self._snapshot = None
        self._emit_change()

    def remove_transaction(self, index: int) -> None:
        if not self._in_range(index):
            return
        if self._transactions[index].edit_mode:
            self._snapshot = None
        del self._transactions[index]
        self._emit_change()

    def edit_transaction(self, index: int) -> None:
        """Put a committed row into edit mode, remembering its fields for cancel."""
        if not self._in_range(index):
            return
        if self._transactions[index].edit_mode:
            return
        editing = self.get_editing_index()
        if editing is not None:
            drops_row = self._snapshot is None
            self._discard_edit()
            if drops_row and editing < index:
                index -= 1
        transaction = self._transactions[index]
        self._snapshot = transaction.snapshot()
        transaction.edit_mode = True
        self._emit_change()

    def transaction_coin_changed(self, coin_id: Optional[str]) -> None:
        transaction = self._editing()
        if transaction is None:
            return
        transaction.coin = pricing_service.resolve_coin(self.get_coins_data(), coin_id)
        transaction.is_coin_valid = validation.is_coin_valid(transaction.coin)
        self._emit_change()

    def transaction_units_changed(self, text: str) -> None:
        transaction = self._editing()
        if transaction is None:
            return
        transaction.units = text
        transaction.is_units_valid = validation.is_units_valid(text)
        self._emit_change()

    def transaction_initial_price_changed(self, text: str) -> None:
        transaction = self._editing()
        if transaction is None:
            return
        transaction.initial_price = text
        transaction.is_initial_price_valid = validation.is_initial_price_valid(text)
        self._emit_change()

    def save_transaction(self) -> None:
        """Commit the row in edit mode. Does nothing unless every field is valid."""
        transaction = self._editing()
        if transaction is None:
            return
        if not transaction.is_valid:
            logger.debug("Ignoring save of invalid transaction")
            return
        transaction.edit_mode = False
        self._snapshot = None
        self._refresh_metrics(transaction, self.get_coins_data())
        self._emit_change()

    def cancel_transaction(self) -> None:
        """Revert the row in edit mode, or drop it if it was never saved."""
        if self._discard_edit():
            self._emit_change()

    def fetch_coins_data(self) -> Optional[asyncio.Task]:
        """
        Start a coin list refresh.

        Inside a running event loop the refresh is scheduled as a task and
        returned so ledger intents keep flowing while it is outstanding.
        Without one it runs to completion before returning.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, refreshing coins data synchronously")
            asyncio.run(self.refresh_coins_data())
            return None
        task = loop.create_task(self.refresh_coins_data())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def refresh_coins_data(self) -> bool:
        """
        Fetch the coin list, cache it, reprice committed rows and notify.

        Failures are logged and leave the cache and the ledger untouched.

        Returns:
            True if the cache was updated.
        """
        try:
            payload = await asyncio.to_thread(self._fetch_coins)
            if not CoinsData.is_payload(payload):
                raise CoinsDataFetchError(f"Unexpected coins data payload: {type(payload).__name__}")
            coins_data = CoinsData.from_payload(payload)
            storage_service.save_coins_data(self._storage, payload)
        except PortfolioError as e:
            logger.warning("Coins data refresh failed: %s", e)
            return False
        for transaction in self._transactions:
            self._refresh_metrics(transaction, coins_data)
        logger.info("Cached %d coins (added_at=%s)", len(coins_data.data), coins_data.added_at)
        self._emit_change()
        return True

    # --- helpers ---

    def _in_range(self, index: int) -> bool:
        if 0 <= index < len(self._transactions):
            return True
        if self._strict_indices:
            raise TransactionIndexError(index, len(self._transactions))
        logger.debug("Ignoring out-of-range transaction index %s", index)
        return False

    def _editing(self) -> Optional[Transaction]:
        index = self.get_editing_index()
        if index is None:
            logger.debug("No transaction in edit mode")
            return None
        return self._transactions[index]

    def _discard_edit(self) -> bool:
        """Leave edit mode without committing. Returns True if a row was affected.

        Does not emit; callers emit once for the whole intent.
        """
        index = self.get_editing_index()
        if index is None:
            return False
        snapshot = self._snapshot
        self._snapshot = None
        if snapshot is None:
            del self._transactions[index]
            return True
        transaction = self._transactions[index]
        transaction.coin = snapshot.coin
        transaction.units = snapshot.units
        transaction.initial_price = snapshot.initial_price
        transaction.is_coin_valid = validation.is_coin_valid(snapshot.coin)
        transaction.is_units_valid = validation.is_units_valid(snapshot.units)
        transaction.is_initial_price_valid = validation.is_initial_price_valid(snapshot.initial_price)
        transaction.edit_mode = False
        return True

    def _refresh_metrics(self, transaction: Transaction, coins_data: CoinsData) -> None:
        """Recompute price and metrics from the row's committed fields.

        For the row in edit mode the committed fields are the snapshot; a row
        that was never saved has no committed fields and keeps zero metrics.
        """
        if transaction.edit_mode:
            if self._snapshot is None:
                transaction.metrics = empty_metrics()
                return
            coin, units, price = self._snapshot.coin, self._snapshot.units, self._snapshot.initial_price
        else:
            coin, units, price = transaction.coin, transaction.units, transaction.initial_price
        transaction.current_price = pricing_service.get_current_price(coins_data, coin.id)
        transaction.metrics = metrics_service.compute_transaction_metrics(
            validation.parse_positive_decimal(units) or 0.0,
            validation.parse_positive_decimal(price) or 0.0,
            transaction.current_price,
        )
