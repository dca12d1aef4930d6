from __future__ import annotations

from typing import Sequence

from ..constants import PERCENT_SCALE
from ..domain import (
    AssetShare,
    AssetValuation,
    CustodyFailure,
    CustodyResult,
    PoolSnapshot,
    PriceTable,
)
from ..logger import get_logger
from .custody_valuer import value_custody

logger = get_logger(__name__)


class EmptyPoolError(Exception):
    """Raised when a pool has no custodies to report on."""

    def __init__(self, message: str):
        super().__init__(message)


def percentage_bps(usd: int, total_usd: int) -> int | None:
    """Share of ``total_usd`` in basis points, floored; None when the total is zero."""
    if total_usd <= 0:
        return None
    return usd * PERCENT_SCALE // total_usd


def aggregate(
    custodies: Sequence[CustodyResult], price_table: PriceTable
) -> PoolSnapshot:
    """Value every custody and compute each asset's share of the pool.

    Args:
        custodies: Per-custody results in pool order; failures from earlier
            stages are passed through as CustodyFailure
        price_table: Oracle prices for this run

    Returns:
        Snapshot of the successfully valued assets in custody order. Failed
        custodies are omitted and reported in ``warnings``.

    Raises:
        EmptyPoolError: If ``custodies`` is empty
    """
    if not custodies:
        raise EmptyPoolError("No custodies found in pool")

    valuations: list[AssetValuation] = []
    warnings: list[str] = []

    for item in custodies:
        if isinstance(item, CustodyFailure):
            logger.warning(item.describe())
            warnings.append(item.describe())
            continue
        try:
            valuation = value_custody(item, price_table)
        except ValueError as e:
            failure = CustodyFailure(
                address=item.address, stage="valuation", reason=str(e)
            )
            logger.warning(failure.describe())
            warnings.append(failure.describe())
            continue
        valuations.append(valuation)
        warnings.extend(valuation.warnings)

    total_usd = sum(v.usd_value for v in valuations)
    if total_usd == 0:
        logger.warning("Total pool USD value is zero; shares are not available")

    shares = tuple(
        AssetShare(valuation=v, percentage_bps=percentage_bps(v.usd_value, total_usd))
        for v in valuations
    )
    return PoolSnapshot(
        assets=tuple(valuations),
        total_usd=total_usd,
        shares=shares,
        warnings=tuple(warnings),
    )
