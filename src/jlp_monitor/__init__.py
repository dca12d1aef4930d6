"""Jupiter Perpetuals pool composition monitor."""

from __future__ import annotations

from .domain import (
    AssetValuation,
    CustodyState,
    OraclePrice,
    PoolSnapshot,
    PriceTable,
)
from .processors import aggregate, build_price_table, value_custody

__all__ = [
    "AssetValuation",
    "CustodyState",
    "OraclePrice",
    "PoolSnapshot",
    "PriceTable",
    "aggregate",
    "build_price_table",
    "value_custody",
]
