"""CLI entrypoint for the JLP pool monitor."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from .logger import setup_logging
from .processors import EmptyPoolError
from .settings import CONFIG_ENV_VAR, MonitorSettings
from .state import AppState

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Report the asset composition of the Jupiter Perpetuals liquidity pool.",
)


def _build_logger() -> logging.Logger:
    """Build a logger instance."""
    return logging.getLogger("jlp_monitor")


@app.command()
def report(
    snapshot_path: Annotated[
        Path | None,
        typer.Argument(help="JSON file with decoded pool and custody accounts."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [jlp_monitor] table).",
        ),
    ] = None,
    pool_address: Annotated[
        str | None,
        typer.Option("--pool", help="Pool account to report on."),
    ] = None,
    oracle_url: Annotated[
        str | None,
        typer.Option("--oracle-url", help="Base URL of the Doves oracle worker."),
    ] = None,
    oracle_enabled: Annotated[
        bool | None,
        typer.Option(
            "--oracle/--no-oracle",
            help="Fetch oracle prices; without them floating assets have no USD value.",
        ),
    ] = None,
    fail_on_warnings: Annotated[
        bool | None,
        typer.Option(
            "--fail-on-warnings/--allow-warnings",
            help="Exit with status 1 when the snapshot is partial or has warnings.",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the snapshot as JSON."),
    ] = False,
    show_config: Annotated[
        bool,
        typer.Option(
            "--show-config",
            help="Print effective config and exit.",
        ),
    ] = False,
):
    """Compute and print the pool composition.

    Loads configuration, fetches oracle prices, values every custody and
    prints each asset's quantity, USD value and share of the pool.
    """
    if config_path:
        os.environ[CONFIG_ENV_VAR] = str(config_path)

    init_kwargs: dict[str, Any] = {}
    if snapshot_path is not None:
        init_kwargs["snapshot_path"] = snapshot_path
    if pool_address is not None:
        init_kwargs["pool_address"] = pool_address
    if oracle_url is not None:
        init_kwargs["oracle_url"] = oracle_url
    if oracle_enabled is not None:
        init_kwargs["oracle_enabled"] = oracle_enabled
    if fail_on_warnings is not None:
        init_kwargs["fail_on_warnings"] = fail_on_warnings
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    try:
        settings = MonitorSettings(**init_kwargs)
    except (ValidationError, FileNotFoundError) as e:
        raise typer.BadParameter(str(e)) from e

    setup_logging(settings.log_level)
    logger = _build_logger()
    state = AppState(settings=settings, logger=logger)

    if show_config:
        typer.echo(json.dumps(settings.as_safe_dict(), indent=2))
        raise typer.Exit(code=0)

    if state.settings.snapshot_path is None:
        raise typer.BadParameter(
            "snapshot_path must be configured",
            param_hint=["SNAPSHOT_PATH", "JLP_MONITOR_SNAPSHOT_PATH"],
        )

    from .pipeline.run import run_report

    try:
        snapshot = asyncio.run(run_report(state, as_json=as_json))
    except (EmptyPoolError, OSError, ValueError, asyncio.TimeoutError) as e:
        logger.error("Failed to report pool composition: %s", e)
        raise typer.Exit(code=1) from e

    if snapshot.has_warnings and state.settings.fail_on_warnings:
        logger.error("Snapshot has %d warning(s)", len(snapshot.warnings))
        raise typer.Exit(code=1)


def run() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    run()
