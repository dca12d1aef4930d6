"""JSON encoding of pool snapshots."""

from __future__ import annotations

from typing import Any

from ..domain import PoolSnapshot
from .formatter import format_percentage, format_quantity, format_usd


def encode_snapshot(pool_address: str, snapshot: PoolSnapshot) -> dict[str, Any]:
    """Encode a snapshot as a JSON-serializable dict.

    Raw fixed-point integers are emitted as strings so that JSON readers with
    53-bit numbers do not lose precision.
    """
    return {
        "pool": pool_address,
        "total_usd": str(snapshot.total_usd),
        "total_usd_display": format_usd(snapshot.total_usd),
        "assets": [
            {
                "symbol": share.valuation.symbol,
                "decimals": share.valuation.decimals,
                "quantity": str(share.valuation.quantity),
                "quantity_display": format_quantity(
                    share.valuation.quantity, share.valuation.decimals
                ),
                "usd_value": str(share.valuation.usd_value),
                "usd_value_display": format_usd(share.valuation.usd_value),
                "percentage": format_percentage(share.percentage_bps),
                "warnings": list(share.valuation.warnings),
            }
            for share in snapshot.shares
        ],
        "warnings": list(snapshot.warnings),
    }
