"""Custody collection from the configured source."""

from __future__ import annotations

import asyncio
from logging import Logger
from typing import Sequence

from ..adapters.custody_sources import BaseCustodySource, SnapshotCustodySource
from ..domain import CustodyFailure, CustodyResult, CustodyState
from ..processors import EmptyPoolError
from .context import PipelineContext


def _collect_results(
    addresses: Sequence[str],
    results: Sequence[BaseException | CustodyState],
    log: Logger,
) -> list[CustodyResult]:
    """Turn asyncio.gather results into per-custody results, in pool order.

    Exceptions become CustodyFailure entries; they never abort the run.
    """
    collected: list[CustodyResult] = []
    for address, result in zip(addresses, results):
        if isinstance(result, Exception):
            log.error("Failed to load custody %s: %s", address, result)
            collected.append(
                CustodyFailure(address=address, stage="decode", reason=str(result))
            )
        elif isinstance(result, BaseException):
            raise result
        else:
            log.debug("Loaded custody %s (%s)", address, result.symbol)
            collected.append(result)
    return collected


def make_custody_source(ctx: PipelineContext) -> BaseCustodySource:
    return SnapshotCustodySource(ctx.state.settings)


async def collect_custodies(ctx: PipelineContext) -> None:
    """Load every custody of the pool.

    Args:
        ctx: Pipeline context containing state

    Sets the per-custody results in the context.

    Raises:
        EmptyPoolError: If the pool lists no custodies
    """
    log = ctx.state.logger
    source = make_custody_source(ctx)

    log.info(
        "Discovering custodies of pool %s via %s source...",
        ctx.pool_address,
        source.source_name,
    )
    addresses = await source.fetch_custody_addresses(ctx.pool_address)
    if not addresses:
        raise EmptyPoolError(f"No custodies found in pool {ctx.pool_address}")
    log.info("Found %d custodies", len(addresses))

    results = await asyncio.gather(
        *(source.fetch_custody(address) for address in addresses),
        return_exceptions=True,
    )
    ctx.custodies = _collect_results(addresses, results, log)
