import dataclasses

import pytest
from pydantic import ValidationError

from jlp_monitor.adapters.price_adapters.base import OracleFeed
from jlp_monitor.domain import OraclePrice, PriceTable
from jlp_monitor.processors.price_table import build_price_table, symbol_from_feed_id


def feed(feed_id: str, price: int, expo: int = -8) -> OracleFeed:
    return OracleFeed(feedId=feed_id, price=price, ts=1_700_000_000, expo=expo)


def test_symbol_from_feed_id_strips_suffix_only():
    assert symbol_from_feed_id("SOLUSD") == "SOL"
    assert symbol_from_feed_id("USDCUSD") == "USDC"
    assert symbol_from_feed_id("ethusd") == "ETH"


def test_symbol_from_feed_id_keeps_bare_suffix():
    assert symbol_from_feed_id("USD") == "USD"


def test_build_price_table_keys_by_symbol():
    table = build_price_table(
        [
            feed("SOLUSD", 15_000_000_000),
            feed("BTCUSD", 6_500_000_000_000),
            feed("USDCUSD", 100_000_000),
        ]
    )

    assert len(table) == 3
    assert table.get("SOL") == OraclePrice("SOL", 15_000_000_000, -8)
    assert table.get("btc") == OraclePrice("BTC", 6_500_000_000_000, -8)
    assert "USDC" in table
    assert table.get("ETH") is None


def test_build_price_table_empty_feed_list():
    table = build_price_table([])

    assert len(table) == 0
    assert table.get("SOL") is None


def test_non_positive_price_is_kept_but_not_usable():
    table = build_price_table([feed("SOLUSD", 0)])

    assert table.get("SOL") == OraclePrice("SOL", 0, -8)
    assert table.usable("SOL") is None


def test_later_feed_replaces_earlier():
    table = build_price_table([feed("SOLUSD", 1), feed("SOLUSD", 2)])

    assert table.get("SOL").mantissa == 2


def test_price_table_is_immutable():
    table = PriceTable({"SOL": OraclePrice("SOL", 1, 0)})

    with pytest.raises(TypeError):
        table._prices["ETH"] = OraclePrice("ETH", 1, 0)  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        table._prices = {}  # type: ignore[misc]


def test_price_table_copies_input_mapping():
    source = {"SOL": OraclePrice("SOL", 1, 0)}
    table = PriceTable(source)
    source["ETH"] = OraclePrice("ETH", 1, 0)

    assert "ETH" not in table


def test_oracle_feed_accepts_integral_strings_and_floats():
    assert OracleFeed(feedId="SOLUSD", price="15000000000", expo=-8).price == 15_000_000_000
    assert OracleFeed(feedId="SOLUSD", price=15000000000.0, expo=-8).price == 15_000_000_000


def test_oracle_feed_rejects_fractional_price():
    with pytest.raises(ValidationError, match="integral"):
        OracleFeed(feedId="SOLUSD", price=1.5, expo=-8)


def test_oracle_feed_rejects_out_of_range_exponent():
    with pytest.raises(ValidationError):
        OracleFeed(feedId="SOLUSD", price=1, expo=-30)


def test_price_table_normalizes_symbol_case():
    table = PriceTable({"sol": OraclePrice("SOL", 1, 0)})

    assert table.get("SOL") is not None
    assert table.symbols == ["SOL"]
