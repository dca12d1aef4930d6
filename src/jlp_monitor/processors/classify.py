from __future__ import annotations

from typing import Collection, Mapping

from ..domain import AssetKind, FloatingAsset, Stablecoin, UnknownAsset


def unknown_label(address: str, display_name: str | None = None) -> str:
    if display_name and display_name.strip():
        return display_name.strip()
    return f"{address[:5]}..."


def classify_custody(
    address: str,
    custody_symbols: Mapping[str, str],
    stablecoin_symbols: Collection[str],
    display_name: str | None = None,
) -> AssetKind:
    """Map a custody address to its asset kind.

    Known addresses become Stablecoin or FloatingAsset by symbol. An unknown
    address whose display name is a configured stablecoin is still a
    Stablecoin; anything else is UnknownAsset labelled by its display name or
    truncated address.
    """
    stablecoins = {s.upper() for s in stablecoin_symbols}
    symbol = custody_symbols.get(address)
    if symbol is None:
        label = unknown_label(address, display_name)
        if display_name and label.upper() in stablecoins:
            return Stablecoin(label.upper())
        return UnknownAsset(label)
    symbol = symbol.upper()
    if symbol in stablecoins:
        return Stablecoin(symbol)
    return FloatingAsset(symbol)
