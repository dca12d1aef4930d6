"""Snapshot building and publication."""

from __future__ import annotations

from ..processors import aggregate
from ..report import publish_snapshot as publish_snapshot_impl
from .context import PipelineContext


async def build_snapshot(ctx: PipelineContext) -> None:
    """Value the collected custodies and set the pool snapshot in the context."""
    log = ctx.state.logger

    log.info("Valuing %d custodies...", len(ctx.custodies))
    snapshot = aggregate(ctx.custodies, ctx.price_table_required)
    log.info(
        "Pool value computed over %d assets (%d warnings)",
        len(snapshot.assets),
        len(snapshot.warnings),
    )
    ctx.snapshot = snapshot


async def publish_snapshot(ctx: PipelineContext, as_json: bool = False) -> None:
    """Render the snapshot to stdout."""
    publish_snapshot_impl(ctx.pool_address, ctx.snapshot_required, as_json=as_json)
