from __future__ import annotations

from .custody_sources import BaseCustodySource, SnapshotCustodySource
from .price_adapters import PRICE_ADAPTERS

__all__ = ["PRICE_ADAPTERS", "BaseCustodySource", "SnapshotCustodySource"]
