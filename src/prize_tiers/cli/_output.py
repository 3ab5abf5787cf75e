import json

from rich.console import Console
from rich.table import Table

from prize_tiers.domain.allocation import MINOR_UNITS_PER_MAJOR, Allocation, DistributionStyle

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def format_money(value: float, symbol: str) -> str:
    return f"{symbol}{value:,.2f}"


def strategy_help(
    prize_style: DistributionStyle,
    player_style: DistributionStyle,
    prize_mult: float,
    player_mult: float,
) -> str:
    """One-line explanation of the selected distribution strategies."""
    if prize_style is DistributionStyle.MULTIPLIER and player_style is DistributionStyle.MULTIPLIER:
        return (
            f"Multiplier: Tier 1 pays {prize_mult:g}x more than Tier 2. "
            f"Tier 2 has {player_mult:g}x more players than Tier 1."
        )
    if DistributionStyle.LINEAR in (prize_style, player_style):
        return "Linear: Values increase/decrease by a fixed step (e.g. 1, 2, 3, 4)."
    if prize_style is DistributionStyle.EQUAL and player_style is DistributionStyle.EQUAL:
        return "Equal: Every tier gets the same prize and player count (where possible)."
    return "Custom strategy selected."


def print_allocation(allocation: Allocation, symbol: str, help_text: str | None = None) -> None:
    console.print(f"[bold]{format_money(allocation.prize, symbol)}[/bold]")
    console.print(f"{allocation.total_winners} Winners / {allocation.players} Players")
    if help_text:
        console.print(f"[dim]{help_text}[/dim]")
    console.print()

    table = Table(title="Prize Distribution")
    table.add_column("Tier")
    table.add_column("Players", justify="right")
    table.add_column("Per Player", justify="right")
    table.add_column("Tier Total", justify="right")
    for tier in allocation.tiers:
        table.add_row(
            tier.name,
            str(tier.count),
            format_money(tier.payout, symbol),
            f"[bold]{format_money(tier.total_minor / MINOR_UNITS_PER_MAJOR, symbol)}[/bold]",
        )
    if allocation.leftover > 0:
        table.add_row(
            "[italic dim]Unassigned pennies (rounding)[/italic dim]",
            "",
            "",
            f"[dim]{allocation.leftover / MINOR_UNITS_PER_MAJOR:.2f}[/dim]",
        )
    console.print(table)


def export_text(allocation: Allocation, symbol: str) -> str:
    """Plain-text summary suitable for pasting into a chat or post."""
    lines = [
        "🏆 PRIZE DISTRIBUTION",
        f"Pool: {format_money(allocation.prize, symbol)} | Winners: {allocation.total_winners}",
        "",
    ]
    lines.extend(f"{t.name}: {t.count}x @ {format_money(t.payout, symbol)}" for t in allocation.tiers if t.count > 0)
    return "\n".join(lines) + "\n"


def print_export(allocation: Allocation, symbol: str) -> None:
    console.print(export_text(allocation, symbol), end="", markup=False, emoji=False)


def print_json(payload: dict[str, object]) -> None:
    console.print_json(json.dumps(payload))
