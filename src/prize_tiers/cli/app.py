import logging
from enum import StrEnum
from typing import Annotated

import typer

from prize_tiers.cli._logging import configure_logging
from prize_tiers.cli._output import print_allocation, print_error, print_export, print_json, strategy_help
from prize_tiers.config import (
    PoolConfigError,
    create_config,
    load_allocation_config,
    load_display_settings,
)
from prize_tiers.domain.allocation import DistributionStyle, WinnerMode
from prize_tiers.domain.result import Err, Ok
from prize_tiers.services.allocation_engine import compute

logger = logging.getLogger(__name__)

app = typer.Typer(name="prize-tiers", help="Prize Tiers — split a prize pool across ranked winner tiers")


class OutputFormat(StrEnum):
    TABLE = "table"
    TEXT = "text"
    JSON = "json"


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """Prize Tiers — split a prize pool across ranked winner tiers."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_PrizeOpt = Annotated[float | None, typer.Option("--prize", help="Total prize pool in major currency units")]
_PlayersOpt = Annotated[int | None, typer.Option("--players", help="Total number of players")]
_WinnerModeOpt = Annotated[WinnerMode | None, typer.Option("--winner-mode", help="Read --winners as a count or a %")]
_WinnersOpt = Annotated[float | None, typer.Option("--winners", help="Winner count, or percent of players")]
_TiersOpt = Annotated[int | None, typer.Option("--tiers", help="Maximum number of tiers (1-5)")]
_PrizeStyleOpt = Annotated[DistributionStyle | None, typer.Option("--prize-style", help="Prize weighting across tiers")]
_PrizeMultOpt = Annotated[float | None, typer.Option("--prize-mult", help="Prize ratio between adjacent tiers")]
_PlayerStyleOpt = Annotated[
    DistributionStyle | None, typer.Option("--player-style", help="Player-count weighting across tiers")
]
_PlayerMultOpt = Annotated[float | None, typer.Option("--player-mult", help="Player ratio between adjacent tiers")]
_ConfigOpt = Annotated[str, typer.Option("--config", help="YAML file with pool and display settings")]
_FormatOpt = Annotated[OutputFormat, typer.Option("--format", help="Output format")]


def _build_overrides(**values: object) -> dict[str, object]:
    """Nest the options the user actually passed under the ``pool`` section."""
    pool: dict[str, object] = {}
    for key, value in values.items():
        if value is None:
            continue
        pool[key] = str(value) if isinstance(value, StrEnum) else value
    return {"pool": pool} if pool else {}


@app.command("compute")
def compute_cmd(
    prize: _PrizeOpt = None,
    players: _PlayersOpt = None,
    winner_mode: _WinnerModeOpt = None,
    winners: _WinnersOpt = None,
    tiers: _TiersOpt = None,
    prize_style: _PrizeStyleOpt = None,
    prize_mult: _PrizeMultOpt = None,
    player_style: _PlayerStyleOpt = None,
    player_mult: _PlayerMultOpt = None,
    config: _ConfigOpt = "prize_tiers.yaml",
    output_format: _FormatOpt = OutputFormat.TABLE,
) -> None:
    """Compute player counts and payouts for every tier."""
    overrides = _build_overrides(
        prize=prize,
        players=players,
        winner_mode=winner_mode,
        winners_val=winners,
        tiers_requested=tiers,
        prize_style=prize_style,
        prize_mult=prize_mult,
        player_style=player_style,
        player_mult=player_mult,
    )
    cfg = create_config(yaml_path=config, overrides=overrides)
    try:
        allocation_config = load_allocation_config(cfg)
    except PoolConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None
    display = load_display_settings(cfg)
    logger.debug("Computing allocation for %s", allocation_config)

    match compute(allocation_config):
        case Ok(allocation):
            if output_format is OutputFormat.JSON:
                print_json(allocation.to_dict())
            elif output_format is OutputFormat.TEXT:
                print_export(allocation, display.currency_symbol)
            else:
                help_text = strategy_help(
                    allocation_config.prize_style,
                    allocation_config.player_style,
                    allocation_config.prize_mult,
                    allocation_config.player_mult,
                )
                print_allocation(allocation, display.currency_symbol, help_text)
        case Err(e):
            if output_format is OutputFormat.JSON:
                print_json({"error": e.message})
            else:
                print_error(e.message)
            raise typer.Exit(code=1)
