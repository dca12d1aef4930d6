"""High-level pipeline orchestration."""

from __future__ import annotations

import asyncio

from ..domain import PoolSnapshot
from ..state import AppState
from .context import PipelineContext
from .custodies import collect_custodies
from .pricing import load_prices
from .report import build_snapshot, publish_snapshot


async def run_report(state: AppState, as_json: bool = False) -> PoolSnapshot:
    """Execute the complete composition pipeline.

    This is a thin orchestrator that sequences the pipeline steps:
    1. Oracle prices
    2. Custody collection
    3. Valuation and aggregation
    4. Output

    Args:
        state: Application state containing settings and logger
        as_json: Emit JSON instead of the console dashboard

    Returns:
        The computed pool snapshot
    """
    s = state.settings
    log = state.logger

    log.info("Starting report", extra={"pool": s.pool_address})

    timeout_s = s.global_timeout_seconds
    ctx = PipelineContext(state=state, pool_address=s.pool_address)

    async def _run_pipeline() -> None:
        # Prices and custodies are independent; fetch them together
        await asyncio.gather(load_prices(ctx), collect_custodies(ctx))
        await build_snapshot(ctx)
        await publish_snapshot(ctx, as_json=as_json)

    try:
        if timeout_s is None or timeout_s <= 0:
            await _run_pipeline()
        else:
            async with asyncio.timeout(timeout_s):
                await _run_pipeline()
    except asyncio.TimeoutError as exc:
        log.error(
            "Report pipeline timed out",
            extra={"pool": s.pool_address, "timeout_seconds": timeout_s},
        )
        raise asyncio.TimeoutError(
            "Report exceeded global timeout "
            f"{timeout_s}s (pool={s.pool_address})\n N.B. This can be changed via `global_timeout_seconds`."
        ) from exc

    log.info("Report completed", extra={"pool": s.pool_address})
    return ctx.snapshot_required
