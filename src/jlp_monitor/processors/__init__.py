from __future__ import annotations

from .classify import classify_custody
from .custody_valuer import value_custody
from .pool_aggregator import EmptyPoolError, aggregate, percentage_bps
from .price_table import build_price_table, symbol_from_feed_id

__all__ = [
    "EmptyPoolError",
    "aggregate",
    "build_price_table",
    "classify_custody",
    "percentage_bps",
    "symbol_from_feed_id",
    "value_custody",
]
