"""Rich console formatter for pool snapshots."""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..constants import USD_DECIMALS
from ..domain import PoolSnapshot

NOT_AVAILABLE = "N/A"


def format_quantity(quantity: int, decimals: int) -> str:
    """Format a fixed-point quantity exactly, e.g. ``900000000000, 9`` -> ``"900"``.

    Uses thousands separators and up to ``decimals`` fractional digits with
    trailing zeros trimmed.
    """
    sign = "-" if quantity < 0 else ""
    whole, frac = divmod(abs(quantity), 10**decimals)
    text = f"{sign}{whole:,}"
    if decimals > 0 and frac:
        text += "." + str(frac).rjust(decimals, "0").rstrip("0")
    return text


def format_usd(usd_value: int) -> str:
    """Format a USD amount (* 10**6) as dollars and cents, truncating sub-cent digits."""
    cents = usd_value // 10 ** (USD_DECIMALS - 2)
    return f"${cents // 100:,}.{cents % 100:02d}"


def format_percentage(percentage_bps: int | None) -> str:
    """Format basis points as a two-decimal percentage, or N/A."""
    if percentage_bps is None:
        return NOT_AVAILABLE
    return f"{percentage_bps // 100}.{percentage_bps % 100:02d}%"


def _truncate_address(address: str) -> str:
    """Truncate address for display."""
    return f"{address[:6]}...{address[-4:]}"


def format_snapshot_table(
    pool_address: str, snapshot: PoolSnapshot, console: Console | None = None
) -> None:
    """Print a rich formatted dashboard of the pool composition to stdout.

    Args:
        pool_address: Pool the snapshot was taken for
        snapshot: The computed pool snapshot
        console: Optional console (tests pass a recording console)
    """
    console = console or Console()

    asset_table = Table(title=None, expand=True, show_lines=False)
    asset_table.add_column("Asset", style="cyan", no_wrap=True)
    asset_table.add_column("Quantity", justify="right")
    asset_table.add_column("USD Value", justify="right", style="green")
    asset_table.add_column("Share", justify="right", style="yellow")

    for share in snapshot.shares:
        valuation = share.valuation
        symbol = Text(valuation.symbol)
        if valuation.warnings:
            symbol.append(" !", style="yellow")
        asset_table.add_row(
            symbol,
            format_quantity(valuation.quantity, valuation.decimals),
            format_usd(valuation.usd_value),
            format_percentage(share.percentage_bps),
        )

    asset_table.add_row(
        "[bold]TOTAL[/]",
        "",
        f"[bold]{format_usd(snapshot.total_usd)}[/]",
        "[bold]100.00%[/]" if snapshot.total_usd > 0 else NOT_AVAILABLE,
        style="bold",
    )

    parts: list = [
        Text(f"Pool {_truncate_address(pool_address)}", style="dim"),
        "",
        asset_table,
    ]

    if snapshot.warnings:
        warnings_text = Text("\n".join(f"- {w}" for w in snapshot.warnings))
        parts += [
            "",
            Panel(warnings_text, title="[bold]Warnings[/]", border_style="yellow"),
        ]

    console.print()
    console.print(
        Panel(
            Group(*parts),
            title="[bold white]Pool Composition[/]",
            border_style="white",
            padding=(1, 2),
        )
    )
    console.print()
