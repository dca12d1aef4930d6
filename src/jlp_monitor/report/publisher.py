"""Snapshot output."""

from __future__ import annotations

import json

import typer

from ..domain import PoolSnapshot
from .encoder import encode_snapshot
from .formatter import format_snapshot_table


def publish_snapshot(
    pool_address: str, snapshot: PoolSnapshot, as_json: bool = False
) -> None:
    """Write the snapshot to stdout as JSON or as the console dashboard."""
    if as_json:
        typer.echo(json.dumps(encode_snapshot(pool_address, snapshot), indent=2))
        return
    format_snapshot_table(pool_address, snapshot)
