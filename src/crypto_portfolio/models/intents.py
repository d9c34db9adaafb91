"""The closed set of intents the portfolio store understands.

Each intent is a small frozen dataclass tagged with its IntentName. The store
handles them in a single exhaustive dispatch (PortfolioStore.handle).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union


class IntentName(str, Enum):
    ADD_TRANSACTION = "ADD_TRANSACTION"
    REMOVE_TRANSACTION = "REMOVE_TRANSACTION"
    EDIT_TRANSACTION = "EDIT_TRANSACTION"
    TRANSACTION_COIN_CHANGED = "TRANSACTION_COIN_CHANGED"
    TRANSACTION_UNITS_CHANGED = "TRANSACTION_UNITS_CHANGED"
    TRANSACTION_INITIAL_PRICE_CHANGED = "TRANSACTION_INITIAL_PRICE_CHANGED"
    SAVE_TRANSACTION = "SAVE_TRANSACTION"
    CANCEL_TRANSACTION = "CANCEL_TRANSACTION"
    FETCH_COINS_DATA = "FETCH_COINS_DATA"


@dataclass(frozen=True)
class AddTransaction:
    name: ClassVar[IntentName] = IntentName.ADD_TRANSACTION


@dataclass(frozen=True)
class RemoveTransaction:
    index: int
    name: ClassVar[IntentName] = IntentName.REMOVE_TRANSACTION


@dataclass(frozen=True)
class EditTransaction:
    index: int
    name: ClassVar[IntentName] = IntentName.EDIT_TRANSACTION


@dataclass(frozen=True)
class TransactionCoinChanged:
    coin_id: Optional[str]
    name: ClassVar[IntentName] = IntentName.TRANSACTION_COIN_CHANGED


@dataclass(frozen=True)
class TransactionUnitsChanged:
    text: str
    name: ClassVar[IntentName] = IntentName.TRANSACTION_UNITS_CHANGED


@dataclass(frozen=True)
class TransactionInitialPriceChanged:
    text: str
    name: ClassVar[IntentName] = IntentName.TRANSACTION_INITIAL_PRICE_CHANGED


@dataclass(frozen=True)
class SaveTransaction:
    name: ClassVar[IntentName] = IntentName.SAVE_TRANSACTION


@dataclass(frozen=True)
class CancelTransaction:
    name: ClassVar[IntentName] = IntentName.CANCEL_TRANSACTION


@dataclass(frozen=True)
class FetchCoinsData:
    name: ClassVar[IntentName] = IntentName.FETCH_COINS_DATA


Intent = Union[
    AddTransaction,
    RemoveTransaction,
    EditTransaction,
    TransactionCoinChanged,
    TransactionUnitsChanged,
    TransactionInitialPriceChanged,
    SaveTransaction,
    CancelTransaction,
    FetchCoinsData,
]
