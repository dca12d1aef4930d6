"""Domain models for pool composition snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Union


@dataclass(frozen=True)
class OraclePrice:
    """Oracle quote for one asset; true price is ``mantissa * 10**exponent`` USD."""

    symbol: str
    mantissa: int
    exponent: int

    @property
    def is_usable(self) -> bool:
        return self.mantissa > 0


@dataclass(frozen=True)
class PriceTable:
    """Immutable symbol -> OraclePrice mapping, built once per run."""

    _prices: Mapping[str, OraclePrice] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_prices",
            MappingProxyType({k.upper(): v for k, v in self._prices.items()}),
        )

    def get(self, symbol: str) -> OraclePrice | None:
        return self._prices.get(symbol.upper())

    def usable(self, symbol: str) -> OraclePrice | None:
        """Return the price for ``symbol`` only if its mantissa is positive."""
        price = self.get(symbol)
        if price is None or not price.is_usable:
            return None
        return price

    @property
    def symbols(self) -> list[str]:
        return sorted(self._prices)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.upper() in self._prices

    def __len__(self) -> int:
        return len(self._prices)


@dataclass(frozen=True)
class Stablecoin:
    """Asset pegged 1:1 to USD; valued without an oracle."""

    symbol: str


@dataclass(frozen=True)
class FloatingAsset:
    """Known asset priced through the oracle."""

    symbol: str


@dataclass(frozen=True)
class UnknownAsset:
    """Custody not in the configured address book.

    ``label`` comes from the decoded account name or a truncated address and
    is valued with the floating-price rule.
    """

    label: str

    @property
    def symbol(self) -> str:
        return self.label


AssetKind = Union[Stablecoin, FloatingAsset, UnknownAsset]


@dataclass(frozen=True)
class CustodyState:
    """Decoded custody account, read-only input to the valuer."""

    address: str
    kind: AssetKind
    decimals: int
    owned_amount: int
    locked_amount: int = 0
    guaranteed_usd_amount: int = 0  # USD * 10**6
    fallback_average_price: int = 0  # globalShortAveragePrices

    @property
    def symbol(self) -> str:
        return self.kind.symbol

    @property
    def is_stablecoin(self) -> bool:
        return isinstance(self.kind, Stablecoin)


@dataclass(frozen=True)
class CustodyFailure:
    """A custody that could not be fetched, decoded or valued."""

    address: str
    stage: str
    reason: str

    def describe(self) -> str:
        return f"Custody {self.address} skipped at {self.stage}: {self.reason}"


CustodyResult = Union[CustodyState, CustodyFailure]


@dataclass(frozen=True)
class AssetValuation:
    """Quantity (native units * 10**decimals) and USD value (* 10**6) of one asset."""

    symbol: str
    quantity: int
    usd_value: int
    decimals: int
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class AssetShare:
    valuation: AssetValuation
    percentage_bps: int | None  # None when the pool total is zero

    @property
    def percentage(self) -> Decimal | None:
        if self.percentage_bps is None:
            return None
        return Decimal(self.percentage_bps) / 100


@dataclass(frozen=True)
class PoolSnapshot:
    """Composition of the pool at one point in time."""

    assets: tuple[AssetValuation, ...]
    total_usd: int
    shares: tuple[AssetShare, ...]
    warnings: tuple[str, ...] = ()

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


__all__ = [
    "AssetKind",
    "AssetShare",
    "AssetValuation",
    "CustodyFailure",
    "CustodyResult",
    "CustodyState",
    "FloatingAsset",
    "OraclePrice",
    "PoolSnapshot",
    "PriceTable",
    "Stablecoin",
    "UnknownAsset",
]
