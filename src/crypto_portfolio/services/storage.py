"""Durable client-side storage: a JSON-backed key-value file and the coins-data cache."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from crypto_portfolio.config.constants import COINS_DATA_STORAGE_KEY, STORAGE_FILE
from crypto_portfolio.errors import StorageError
from crypto_portfolio.models.core import CoinsData

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """
    String key-value store persisted to a single JSON file.

    Values are stored as strings and read back verbatim. A missing or invalid
    file reads as empty; write failures raise StorageError.
    """

    def __init__(self, path: str = STORAGE_FILE) -> None:
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable storage file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: Dict[str, str]) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=4)
        except OSError as e:
            raise StorageError(f"Error writing storage file {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)


def save_coins_data(storage: KeyValueStorage, payload: Any) -> None:
    """Write the coin list payload, serialized as returned by the endpoint."""
    storage.set_item(COINS_DATA_STORAGE_KEY, json.dumps(payload))


def load_coins_data(storage: KeyValueStorage) -> CoinsData:
    """Read the cached coin list. Returns an empty CoinsData if nothing is cached."""
    raw = storage.get_item(COINS_DATA_STORAGE_KEY)
    if not raw:
        return CoinsData()
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.warning("Cached coins data under %s is not valid JSON", COINS_DATA_STORAGE_KEY)
        return CoinsData()
    return CoinsData.from_payload(payload)
