from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...constants import DEFAULT_CUSTODY_DECIMALS
from ...domain import CustodyState
from ...logger import get_logger
from ...processors.classify import classify_custody
from ...settings import MonitorSettings
from .base import BaseCustodySource, CustodyDecodeError

logger = get_logger(__name__)


class CustodyAssetsRecord(BaseModel):
    owned: int = Field(ge=0)
    locked: int = Field(default=0, ge=0)
    guaranteed_usd: int = Field(default=0, ge=0, alias="guaranteedUsd")
    global_short_average_prices: int = Field(
        default=0, ge=0, alias="globalShortAveragePrices"
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator(
        "owned", "locked", "guaranteed_usd", "global_short_average_prices", mode="before"
    )
    @classmethod
    def parse_u64(cls, v: Any) -> Any:
        # u64 fields are usually serialized as strings to survive JSON readers
        if isinstance(v, str):
            return int(v.strip())
        return v


class CustodyRecord(BaseModel):
    """Decoded custody account as exported from the Perpetuals program."""

    decimals: int | None = Field(default=None, ge=0)
    name: str | None = None
    symbol: str | None = None
    assets: CustodyAssetsRecord

    model_config = ConfigDict(extra="ignore")


class PoolRecord(BaseModel):
    """Decoded pool account: ordered custody addresses plus their records."""

    custodies: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class SnapshotCustodySource(BaseCustodySource):
    """Reads already-decoded pool and custody accounts from a JSON file.

    Layout::

        {
          "pools": {"<pool>": {"custodies": ["<custody>", ...]}},
          "custodies": {"<custody>": {"decimals": 9, "assets": {...}}}
        }

    Custody values that are missing or fail validation raise
    CustodyDecodeError for that custody only.
    """

    def __init__(self, config: MonitorSettings, path: Path | None = None):
        super().__init__(config)
        self.path = path or config.snapshot_path_required
        self._data: dict[str, Any] | None = None

    @property
    def source_name(self) -> str:
        return "snapshot"

    async def _load(self) -> dict[str, Any]:
        if self._data is None:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
            data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError(f"Snapshot {self.path} must contain a JSON object")
            for key in ("pools", "custodies"):
                if not isinstance(data.get(key) or {}, dict):
                    raise ValueError(
                        f"Snapshot {self.path}: '{key}' must be an object keyed by address"
                    )
            self._data = data
            logger.debug("Loaded account snapshot from %s", self.path)
        return self._data

    async def fetch_custody_addresses(self, pool_address: str) -> list[str]:
        data = await self._load()
        raw_pool = (data.get("pools") or {}).get(pool_address)
        if raw_pool is None:
            raise ValueError(f"Pool {pool_address} not found in snapshot {self.path}")
        return PoolRecord.model_validate(raw_pool).custodies

    def decode(self, address: str, raw: Any) -> CustodyState:
        if raw is None:
            raise CustodyDecodeError(address, "custody account not found")
        try:
            record = CustodyRecord.model_validate(raw)
        except ValidationError as e:
            raise CustodyDecodeError(address, f"invalid custody data: {e}") from e

        kind = classify_custody(
            address,
            self.config.custody_symbols,
            self.config.stablecoin_symbols,
            display_name=record.name or record.symbol,
        )
        return CustodyState(
            address=address,
            kind=kind,
            decimals=record.decimals or DEFAULT_CUSTODY_DECIMALS,
            owned_amount=record.assets.owned,
            locked_amount=record.assets.locked,
            guaranteed_usd_amount=record.assets.guaranteed_usd,
            fallback_average_price=record.assets.global_short_average_prices,
        )

    async def fetch_custody(self, address: str) -> CustodyState:
        data = await self._load()
        return self.decode(address, (data.get("custodies") or {}).get(address))
