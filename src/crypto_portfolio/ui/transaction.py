"""Interaction controller for one transaction row.

Translates clicks, field edits and key presses into intents. The row's
VIEW/EDIT state is read from the ledger; the focus target and whether the
coin picker is open are local to the controller and never reach the store.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from crypto_portfolio.config.constants import EDITABLE_FIELDS, FIELD_COIN
from crypto_portfolio.dispatcher import PortfolioActions
from crypto_portfolio.models.core import Transaction
from crypto_portfolio.services import pricing as pricing_service
from crypto_portfolio.store import PortfolioStore
from crypto_portfolio.ui.keyboard import KeyboardListeners


KEY_ENTER = "Enter"
KEY_ESCAPE = "Escape"


class RowState(str, Enum):
    VIEW = "VIEW"
    EDIT = "EDIT"


class TransactionEditController:
    """
    Controller for the row at ``index`` of the ledger.

    Call mount() when the row is displayed and unmount() when it goes away;
    call rebind() when removals shift the row to a new position.
    """

    def __init__(
        self,
        index: int,
        store: PortfolioStore,
        actions: PortfolioActions,
        keyboard: KeyboardListeners,
    ) -> None:
        self.index = index
        self.store = store
        self.actions = actions
        self.keyboard = keyboard
        self.field_to_focus = FIELD_COIN
        self.is_coin_menu_open = False
        self.is_mounted = False

    @property
    def transaction(self) -> Optional[Transaction]:
        transactions = self.store.get_portfolio().transactions
        if 0 <= self.index < len(transactions):
            return transactions[self.index]
        return None

    @property
    def state(self) -> RowState:
        transaction = self.transaction
        return RowState.EDIT if transaction is not None and transaction.edit_mode else RowState.VIEW

    @property
    def is_save_enabled(self) -> bool:
        transaction = self.transaction
        return transaction is not None and transaction.is_valid

    # --- lifecycle ---

    def mount(self) -> None:
        if not self.is_mounted:
            self.keyboard.add_listener(self.on_key_down)
            self.is_mounted = True

    def unmount(self) -> None:
        if self.is_mounted:
            self.keyboard.remove_listener(self.on_key_down)
            self.is_mounted = False

    def rebind(self, index: int) -> None:
        self.index = index

    # --- field edits ---

    def on_coin_change(self, selected_coin: Optional[Mapping[str, Any]]) -> None:
        coin_id = selected_coin.get("id") if selected_coin else None
        self.actions.transaction_coin_changed(coin_id)

    def on_units_change(self, units: str) -> None:
        self.actions.transaction_units_changed(units)

    def on_initial_price_change(self, initial_price: str) -> None:
        self.actions.transaction_initial_price_changed(initial_price)

    def on_coin_menu_open(self) -> None:
        self.is_coin_menu_open = True

    def on_coin_menu_close(self) -> None:
        self.is_coin_menu_open = False

    # --- clicks ---

    def on_cell_click(self, name: str) -> None:
        """Enter edit mode from a click on one of the row's fields."""
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Not an editable field: {name!r}")
        if self.state is RowState.VIEW and self.transaction is not None:
            self.actions.edit_transaction(self.index)
            self.field_to_focus = name

    def on_save_transaction(self) -> None:
        self.actions.save_transaction()

    def on_cancel_transaction(self) -> None:
        self.actions.cancel_transaction()

    def on_remove_transaction(self) -> None:
        self.actions.remove_transaction(self.index)

    # --- keyboard ---

    def on_key_down(self, key: str) -> None:
        """Enter saves and Escape cancels, unless the coin picker is open and owns the key."""
        transaction = self.transaction
        if transaction is None or not transaction.edit_mode or self.is_coin_menu_open:
            return
        if key == KEY_ESCAPE:
            self.actions.cancel_transaction()
        elif key == KEY_ENTER and transaction.is_valid:
            self.actions.save_transaction()

    # --- coin picker ---

    def coin_options(self) -> List[Dict[str, str]]:
        return pricing_service.coins_for_select(self.store.get_coins_data())

    def selected_coin(self) -> Optional[Dict[str, str]]:
        """The picker value for the row's coin, or None when no coin is set."""
        transaction = self.transaction
        if transaction is None or not transaction.coin.is_set:
            return None
        coin = transaction.coin
        return {"id": coin.id, "label": coin.label, "symbol": coin.symbol}
