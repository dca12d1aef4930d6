from __future__ import annotations

from .base import BasePriceAdapter, OracleFeed
from .doves import DovesPriceAdapter

PRICE_ADAPTERS: list[type[BasePriceAdapter]] = [DovesPriceAdapter]

__all__ = [
    "PRICE_ADAPTERS",
    "BasePriceAdapter",
    "DovesPriceAdapter",
    "OracleFeed",
]
