"""Centralized logging setup."""

from __future__ import annotations

import logging
import sys

from crypto_portfolio.config.constants import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure application logging on stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
