"""Oracle price loading."""

from __future__ import annotations

from ..adapters import PRICE_ADAPTERS
from ..adapters.price_adapters.base import OracleFeed
from ..domain import PriceTable
from ..processors import build_price_table
from .context import PipelineContext


async def load_prices(ctx: PipelineContext) -> None:
    """Fetch oracle feeds and build the run's price table.

    Args:
        ctx: Pipeline context containing state

    Sets the price table in the context. A disabled or failed oracle yields
    an empty table; floating assets are then reported without USD value.
    """
    s = ctx.state.settings
    log = ctx.state.logger

    if not s.oracle_enabled:
        log.warning("Oracle disabled; floating assets will have no USD value")
        ctx.price_table = PriceTable()
        return

    log.info("Fetching oracle prices for %s...", ", ".join(s.oracle_symbols))
    feeds: list[OracleFeed] = []
    for adapter_cls in PRICE_ADAPTERS:
        adapter = adapter_cls(s)
        adapter_feeds = await adapter.fetch_feeds(s.oracle_symbols)
        log.debug(
            "Price adapter '%s' returned %d feeds",
            adapter.adapter_name,
            len(adapter_feeds),
        )
        feeds.extend(adapter_feeds)

    table = build_price_table(feeds)
    if not table:
        log.warning("No oracle prices available; valuing in no-price mode")
    else:
        log.info("Price table ready: %s", ", ".join(table.symbols))
    ctx.price_table = table
