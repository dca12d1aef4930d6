import pytest

from jlp_monitor.domain import (
    CustodyState,
    FloatingAsset,
    OraclePrice,
    PriceTable,
    Stablecoin,
    UnknownAsset,
)
from jlp_monitor.processors.custody_valuer import (
    guaranteed_usd_to_tokens,
    guaranteed_usd_to_tokens_fallback,
    value_custody,
)

SOL_PRICE = OraclePrice("SOL", 15_000_000_000, -8)  # $150.00000000


def sol_custody(**overrides) -> CustodyState:
    values = dict(
        address="7xS2gz2bTp3fwCC7knJvUWTEU9Tycczu6VhJYKgi1wdz",
        kind=FloatingAsset("SOL"),
        decimals=9,
        owned_amount=1_000 * 10**9,
        locked_amount=100 * 10**9,
        guaranteed_usd_amount=0,
        fallback_average_price=0,
    )
    values.update(overrides)
    return CustodyState(**values)


def usdc_custody(owned: int, decimals: int = 6) -> CustodyState:
    return CustodyState(
        address="G18jKKXQwBbrHeiK3C9MRXhkHsLHf7XgCSisykV46EZa",
        kind=Stablecoin("USDC"),
        decimals=decimals,
        owned_amount=owned,
        locked_amount=owned // 2,
        guaranteed_usd_amount=10**12,
    )


@pytest.fixture
def prices() -> PriceTable:
    return PriceTable({"SOL": SOL_PRICE})


def test_floating_asset_with_oracle_price(prices):
    valuation = value_custody(sol_custody(), prices)

    assert valuation.symbol == "SOL"
    assert valuation.quantity == 900 * 10**9
    assert valuation.usd_value == 135_000_000_000
    assert valuation.decimals == 9
    assert valuation.warnings == ()


@pytest.mark.parametrize(
    "owned,locked",
    [(0, 0), (1, 1), (10**9, 0), (10**30, 10**29), (12_345, 6_789)],
)
def test_floating_quantity_is_owned_minus_locked(prices, owned, locked):
    valuation = value_custody(
        sol_custody(owned_amount=owned, locked_amount=locked), prices
    )

    assert valuation.quantity == owned - locked


def test_guaranteed_usd_is_added_as_tokens(prices):
    # $1,500 at $150 is 10 SOL
    valuation = value_custody(
        sol_custody(guaranteed_usd_amount=1_500_000_000), prices
    )

    assert valuation.quantity == 910 * 10**9
    assert valuation.usd_value == 136_500_000_000


def test_guaranteed_usd_conversion_with_negative_exponent_difference():
    # decimals=2, price=150 with expo 0 -> d = 2 - 6 = -4
    price = OraclePrice("XYZ", 150, 0)

    assert guaranteed_usd_to_tokens(1_500_000_000, 2, price) == 1_000


def test_guaranteed_usd_conversion_floors():
    price = OraclePrice("XYZ", 3, 0)

    # 1 USD at $3 with 6 decimals: 333333.33 -> 333333
    assert guaranteed_usd_to_tokens(1_000_000, 6, price) == 333_333


def test_usd_value_with_positive_exponent_difference():
    custody = sol_custody(
        kind=FloatingAsset("XYZ"), decimals=2, owned_amount=1_000, locked_amount=0
    )
    table = PriceTable({"XYZ": OraclePrice("XYZ", 150, 0)})

    valuation = value_custody(custody, table)

    # 10.00 XYZ * $150 = $1,500 -> e = 0 + 6 - 2 = 4
    assert valuation.usd_value == 1_500_000_000


def test_stablecoin_uses_owned_and_ignores_price_table():
    valuation = value_custody(usdc_custody(500_000 * 10**6), PriceTable())

    assert valuation.quantity == 500_000 * 10**6
    assert valuation.usd_value == 500_000_000_000
    assert valuation.warnings == ()


@pytest.mark.parametrize(
    "decimals,owned,expected",
    [
        (6, 1_234_567, 1_234_567),
        (4, 12_345, 1_234_500),
        (0, 7, 7_000_000),
        (8, 123_456_789, 1_234_567),
        (18, 10**18, 10**6),
    ],
)
def test_stablecoin_usd_rescaled_to_usd_precision(decimals, owned, expected):
    valuation = value_custody(usdc_custody(owned, decimals), PriceTable())

    assert valuation.quantity == owned
    assert valuation.usd_value == expected


def test_missing_price_without_fallback_degrades_to_zero():
    valuation = value_custody(
        sol_custody(guaranteed_usd_amount=1_500_000_000), PriceTable()
    )

    assert valuation.quantity == 900 * 10**9
    assert valuation.usd_value == 0
    assert len(valuation.warnings) == 2
    assert "No oracle price for SOL" in valuation.warnings[0]


def test_missing_price_uses_fallback_average_price_for_quantity():
    valuation = value_custody(
        sol_custody(
            guaranteed_usd_amount=1_500_000_000,
            fallback_average_price=150_000_000,
        ),
        PriceTable(),
    )

    assert valuation.quantity == 910 * 10**9
    assert valuation.usd_value == 0
    assert valuation.warnings


def test_zero_price_is_treated_as_missing():
    table = PriceTable({"SOL": OraclePrice("SOL", 0, -8)})

    valuation = value_custody(sol_custody(), table)

    assert valuation.usd_value == 0
    assert valuation.warnings


def test_fallback_conversion_is_zero_without_average_price():
    assert guaranteed_usd_to_tokens_fallback(1_500_000_000, 9, 0) == 0
    assert guaranteed_usd_to_tokens_fallback(0, 9, 150_000_000) == 0


def test_unknown_asset_valued_with_floating_rule():
    custody = sol_custody(kind=UnknownAsset("JUP"))
    table = PriceTable({"JUP": OraclePrice("JUP", 100_000_000, -8)})

    valuation = value_custody(custody, table)

    assert valuation.symbol == "JUP"
    assert valuation.quantity == 900 * 10**9
    assert valuation.usd_value == 900_000_000


def test_large_quantities_do_not_overflow(prices):
    owned = 2**64 * 10**9
    valuation = value_custody(
        sol_custody(owned_amount=owned, locked_amount=0), prices
    )

    assert valuation.usd_value == owned * 15_000_000_000 // 10**11


def test_locked_above_owned_is_rejected(prices):
    with pytest.raises(ValueError, match="exceeds owned amount"):
        value_custody(sol_custody(owned_amount=1, locked_amount=2), prices)


def test_negative_amount_is_rejected(prices):
    with pytest.raises(ValueError, match="must be non-negative"):
        value_custody(sol_custody(guaranteed_usd_amount=-1), prices)
