from __future__ import annotations

from ..constants import USD_DECIMALS
from ..domain import AssetValuation, CustodyState, OraclePrice, PriceTable
from ..logger import get_logger
from ..units import rescale, shift_decimals

logger = get_logger(__name__)


def _validate(custody: CustodyState) -> None:
    if custody.decimals < 0:
        raise ValueError(f"{custody.symbol}: decimals must be non-negative")
    for name in (
        "owned_amount",
        "locked_amount",
        "guaranteed_usd_amount",
        "fallback_average_price",
    ):
        if getattr(custody, name) < 0:
            raise ValueError(f"{custody.symbol}: {name} must be non-negative")
    if not custody.is_stablecoin and custody.locked_amount > custody.owned_amount:
        raise ValueError(
            f"{custody.symbol}: locked amount {custody.locked_amount} exceeds "
            f"owned amount {custody.owned_amount}"
        )


def guaranteed_usd_to_tokens(
    guaranteed_usd: int, decimals: int, price: OraclePrice
) -> int:
    """Convert guaranteed USD (* 10**6) into token units (* 10**decimals) at the oracle price."""
    if guaranteed_usd <= 0:
        return 0
    d = decimals - (USD_DECIMALS + price.exponent)
    if d >= 0:
        return guaranteed_usd * 10**d // price.mantissa
    return guaranteed_usd // (price.mantissa * 10 ** (-d))


def guaranteed_usd_to_tokens_fallback(
    guaranteed_usd: int, decimals: int, average_price: int
) -> int:
    """Convert guaranteed USD into token units using the custody's average price.

    Zero when there is no exposure or no average price.
    """
    if guaranteed_usd <= 0 or average_price <= 0:
        return 0
    return guaranteed_usd * 10**decimals // average_price


def usd_value(quantity: int, decimals: int, price: OraclePrice) -> int:
    """USD value (* 10**6) of ``quantity`` token units at ``price``."""
    return shift_decimals(
        quantity * price.mantissa, price.exponent + USD_DECIMALS - decimals
    )


def value_custody(custody: CustodyState, price_table: PriceTable) -> AssetValuation:
    """Compute held quantity and USD value for one custody.

    Stablecoins hold ``owned`` and are valued 1:1 to USD. Every other asset
    holds ``owned - locked`` plus its guaranteed USD exposure converted to
    tokens, and is valued at the oracle price.

    Missing prices never raise: the quantity falls back to the custody's
    average price, the USD value is zero, and warnings are attached to the
    returned valuation.

    Raises:
        ValueError: If the custody state is malformed (negative amounts or
            locked > owned).
    """
    _validate(custody)
    symbol = custody.symbol
    decimals = custody.decimals

    if custody.is_stablecoin:
        quantity = custody.owned_amount
        return AssetValuation(
            symbol=symbol,
            quantity=quantity,
            usd_value=rescale(quantity, decimals, USD_DECIMALS),
            decimals=decimals,
        )

    warnings: list[str] = []
    base_quantity = custody.owned_amount - custody.locked_amount
    price = price_table.usable(symbol)

    if price is not None:
        token_units = guaranteed_usd_to_tokens(
            custody.guaranteed_usd_amount, decimals, price
        )
    else:
        message = f"No oracle price for {symbol} (missing or zero); using average price for quantity"
        logger.warning(message)
        warnings.append(message)
        token_units = guaranteed_usd_to_tokens_fallback(
            custody.guaranteed_usd_amount, decimals, custody.fallback_average_price
        )

    quantity = base_quantity + token_units

    if price is None:
        message = f"Cannot compute USD value of {symbol} without a price"
        logger.warning(message)
        warnings.append(message)
        value = 0
    else:
        value = usd_value(quantity, decimals, price)

    logger.debug(
        "%s: quantity=%d (base=%d, guaranteed=%d) usd=%d",
        symbol,
        quantity,
        base_quantity,
        token_units,
        value,
    )
    return AssetValuation(
        symbol=symbol,
        quantity=quantity,
        usd_value=value,
        decimals=decimals,
        warnings=tuple(warnings),
    )
