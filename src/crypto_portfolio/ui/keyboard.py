"""Process-wide keyboard listener registry."""

from __future__ import annotations

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

KeyListener = Callable[[str], None]


class KeyboardListeners:
    """
    Fan-out of key presses to every registered listener.

    Rows register on mount and must deregister on unmount so no intent is
    fired for a row that is no longer displayed.
    """

    def __init__(self) -> None:
        self._listeners: List[KeyListener] = []

    def add_listener(self, listener: KeyListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def __len__(self) -> int:
        return len(self._listeners)

    def key_down(self, key: str) -> None:
        logger.debug("Key down: %s (%d listeners)", key, len(self._listeners))
        for listener in list(self._listeners):
            listener(key)
