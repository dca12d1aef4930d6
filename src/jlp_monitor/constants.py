"""Jupiter Perpetuals pool and oracle constants."""

from typing import TypedDict


class PoolCustodies(TypedDict):
    SOL: str
    ETH: str
    BTC: str
    USDC: str
    USDT: str


# All USD amounts are integers scaled by 10**USD_DECIMALS.
USD_DECIMALS = 6
PERCENT_SCALE = 10_000  # basis points of the pool total

JLP_POOL_ADDRESS = "5BUwFW4nRbftYTDMbgxykoFWqWHPzahFSNAaaaJtVKsq"

JLP_CUSTODIES: PoolCustodies = {
    "SOL": "7xS2gz2bTp3fwCC7knJvUWTEU9Tycczu6VhJYKgi1wdz",
    "ETH": "AQCGyheWPLeo6Qp9WpYS9m3Qj479t7R636N9ey1rEjEn",
    "BTC": "5Pv3gM9JrFFH883SWAhvJC9RPYmo8UNxuFtv5bMMALkm",
    "USDC": "G18jKKXQwBbrHeiK3C9MRXhkHsLHf7XgCSisykV46EZa",
    "USDT": "4vkNeXiYEUizLdrpdPS1eC2mccyM4NUPRtERrk6ZETkk",
}

STABLECOIN_SYMBOLS = ("USDC", "USDT")

DEFAULT_DOVES_ORACLE_URL = "https://worker.jup.ag/doves-oracle"
ORACLE_QUOTE_SUFFIX = "USD"
DEFAULT_ORACLE_SYMBOLS = ("BTC", "ETH", "SOL", "USDC", "USDT")

# Pyth-style exponents stay well inside this range
MAX_ORACLE_EXPONENT = 24

# Anchor decodes zero/absent decimals as falsy; the pool then assumes USDC scale
DEFAULT_CUSTODY_DECIMALS = 6
