from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...constants import MAX_ORACLE_EXPONENT
from ...settings import MonitorSettings


class OracleFeed(BaseModel):
    """Raw oracle feed entry, e.g. ``{"feedId": "SOLUSD", "price": 15000000000, "ts": ..., "expo": -8}``."""

    feed_id: str = Field(alias="feedId", min_length=1)
    price: int
    timestamp: int = Field(default=0, alias="ts")
    exponent: int = Field(alias="expo", ge=-MAX_ORACLE_EXPONENT, le=MAX_ORACLE_EXPONENT)

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @field_validator("price", mode="before")
    @classmethod
    def coerce_integral_price(cls, v: Any) -> Any:
        """Accept integral JSON numbers and numeric strings without float rounding."""
        if isinstance(v, bool):
            raise ValueError("price must be an integer, got bool")
        if isinstance(v, (float, str)):
            try:
                value = Decimal(str(v))
            except InvalidOperation as exc:
                raise ValueError(f"price is not numeric: {v!r}") from exc
            if value != value.to_integral_value():
                raise ValueError(f"price must be integral, got {v!r}")
            return int(value)
        return v


class BasePriceAdapter(ABC):
    """Abstract base class for price adapters."""

    def __init__(self, config: MonitorSettings):
        """Initialize the adapter with configuration."""
        self.config = config

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return the name of this adapter."""
        ...

    @abstractmethod
    async def fetch_feeds(self, symbols: list[str]) -> list[OracleFeed]:
        """Fetch raw feed entries for the given asset symbols."""
        ...
