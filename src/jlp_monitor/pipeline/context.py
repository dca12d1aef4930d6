from __future__ import annotations

from dataclasses import dataclass, field

from ..domain import CustodyResult, PoolSnapshot, PriceTable
from ..state import AppState


@dataclass
class PipelineContext:
    state: AppState
    pool_address: str
    price_table: PriceTable | None = None
    custodies: list[CustodyResult] = field(default_factory=list)
    snapshot: PoolSnapshot | None = None

    @property
    def price_table_required(self) -> PriceTable:
        if self.price_table is None:
            raise RuntimeError(
                "Price table has not been set. Ensure load_prices() is called before accessing this property."
            )
        return self.price_table

    @property
    def snapshot_required(self) -> PoolSnapshot:
        if self.snapshot is None:
            raise RuntimeError(
                "Snapshot has not been set. Ensure build_snapshot() is called before accessing this property."
            )
        return self.snapshot
