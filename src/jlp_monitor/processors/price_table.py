from __future__ import annotations

from typing import Iterable

from ..adapters.price_adapters.base import OracleFeed
from ..constants import ORACLE_QUOTE_SUFFIX
from ..domain import OraclePrice, PriceTable
from ..logger import get_logger

logger = get_logger(__name__)


def symbol_from_feed_id(feed_id: str, suffix: str = ORACLE_QUOTE_SUFFIX) -> str:
    """Strip the quote currency suffix: ``"SOLUSD"`` -> ``"SOL"``, ``"USDCUSD"`` -> ``"USDC"``."""
    symbol = feed_id.strip().upper()
    suffix = suffix.upper()
    if suffix and symbol.endswith(suffix) and len(symbol) > len(suffix):
        symbol = symbol[: -len(suffix)]
    return symbol


def build_price_table(
    feeds: Iterable[OracleFeed], suffix: str = ORACLE_QUOTE_SUFFIX
) -> PriceTable:
    """Normalize raw oracle feed entries into a symbol-keyed price table.

    Args:
        feeds: Feed entries as returned by a price adapter (may be empty)
        suffix: Quote currency suffix to strip from each feed id

    Returns:
        Immutable price table. Symbols without a feed are simply absent.

    Non-positive prices are kept but logged; the valuer treats them as missing.
    A later feed for the same symbol replaces an earlier one.
    """
    prices: dict[str, OraclePrice] = {}
    for feed in feeds:
        symbol = symbol_from_feed_id(feed.feed_id, suffix)
        if feed.price <= 0:
            logger.warning(
                "Oracle feed %s has non-positive price %d", feed.feed_id, feed.price
            )
        if symbol in prices:
            logger.debug("Duplicate oracle feed for %s, keeping latest", symbol)
        prices[symbol] = OraclePrice(
            symbol=symbol, mantissa=feed.price, exponent=feed.exponent
        )

    logger.debug("Price table built for: %s", ", ".join(sorted(prices)) or "<none>")
    return PriceTable(prices)
