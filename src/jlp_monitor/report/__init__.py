from __future__ import annotations

from .encoder import encode_snapshot
from .formatter import (
    format_percentage,
    format_quantity,
    format_snapshot_table,
    format_usd,
)
from .publisher import publish_snapshot

__all__ = [
    "encode_snapshot",
    "format_percentage",
    "format_quantity",
    "format_snapshot_table",
    "format_usd",
    "publish_snapshot",
]
