from jlp_monitor.domain import FloatingAsset, Stablecoin, UnknownAsset
from jlp_monitor.processors.classify import classify_custody

CUSTODIES = {
    "sol-addr": "SOL",
    "usdc-addr": "usdc",
}


def test_known_floating_asset():
    assert classify_custody("sol-addr", CUSTODIES, ["USDC"]) == FloatingAsset("SOL")


def test_known_stablecoin_is_case_insensitive():
    assert classify_custody("usdc-addr", CUSTODIES, ["usdc"]) == Stablecoin("USDC")


def test_unknown_asset_uses_display_name():
    kind = classify_custody("JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN", CUSTODIES, [], "JUP")

    assert kind == UnknownAsset("JUP")
    assert kind.symbol == "JUP"


def test_unknown_asset_falls_back_to_truncated_address():
    kind = classify_custody("JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN", CUSTODIES, [], "  ")

    assert kind == UnknownAsset("JUPyi...")


def test_unknown_address_named_as_stablecoin_is_stablecoin():
    kind = classify_custody("new-usdc-addr", CUSTODIES, ["USDC", "USDT"], " usdc ")

    assert kind == Stablecoin("USDC")


def test_unknown_address_truncation_never_matches_stablecoin():
    assert classify_custody("USDT1", CUSTODIES, ["USDT"]) == UnknownAsset("USDT1...")
