import logging
import math
from collections.abc import Sequence
from fractions import Fraction

from prize_tiers.domain.allocation import (
    MAX_TIERS,
    MINOR_UNITS_PER_MAJOR,
    TIER_NAMES,
    Allocation,
    AllocationConfig,
    DistributionStyle,
    Tier,
    WinnerMode,
)
from prize_tiers.domain.errors import AllocationError, InvalidInput, ZeroShareError
from prize_tiers.domain.result import Err, Ok, Result
from prize_tiers.services.apportionment import largest_remainder

logger = logging.getLogger(__name__)


def compute(config: AllocationConfig) -> Result[Allocation, AllocationError]:
    """Split a prize pool and its winners across the ranked tiers.

    Player counts and payouts are both integer allocations: every winner
    lands in exactly one tier and every minor unit of the pool is either paid
    out or reported as ``leftover``. Failures come back as ``Err`` records,
    never as exceptions.
    """
    invalid = _validate(config)
    if invalid is not None:
        return Err(invalid)

    total_winners = derive_total_winners(config)
    num_tiers = active_tier_count(config.tiers_requested, total_winners)
    logger.debug("Pool of %d players: %d winners across %d tiers", config.players, total_winners, num_tiers)

    counts = distribute_players(total_winners, player_weights(config.player_style, config.player_mult, num_tiers))
    weights = prize_weights(config.prize_style, config.prize_mult, num_tiers)
    total_minor = to_minor_units(config.prize)

    payouts = distribute_prize(counts, weights, total_minor)
    if isinstance(payouts, Err):
        return payouts

    tiers = tuple(
        Tier(name=TIER_NAMES[i], count=counts[i], weight=_display_weight(weights[i]), payout_minor=payouts.value[i])
        for i in range(num_tiers)
    )
    leftover = total_minor - sum(t.total_minor for t in tiers)
    logger.debug("Distributed %d of %d minor units, %d left over", total_minor - leftover, total_minor, leftover)
    return Ok(
        Allocation(
            prize=config.prize,
            players=config.players,
            total_winners=total_winners,
            tiers=tiers,
            leftover=leftover,
        )
    )


def _validate(config: AllocationConfig) -> InvalidInput | None:
    if not math.isfinite(config.prize) or config.prize <= 0 or config.players <= 0:
        return InvalidInput(
            message="Please enter a valid Prize Pool and Player count.",
            field="prize" if config.players > 0 else "players",
            value=config.prize if config.players > 0 else config.players,
        )
    if not math.isfinite(config.winners_val):
        return InvalidInput(
            message=f"Winner value must be a finite number, got {config.winners_val}",
            field="winners_val",
            value=config.winners_val,
        )
    for field, mult in (("prize_mult", config.prize_mult), ("player_mult", config.player_mult)):
        if not math.isfinite(mult) or mult < 0:
            return InvalidInput(
                message=f"Multiplier '{field}' must be a non-negative number, got {mult}",
                field=field,
                value=mult,
            )
    return None


def derive_total_winners(config: AllocationConfig) -> int:
    """Winner count, clamped into ``[1, players]`` rather than rejected."""
    if config.winner_mode is WinnerMode.PERCENT:
        raw = math.floor(config.players * Fraction(config.winners_val) / 100)
    else:
        raw = math.floor(config.winners_val)
    return max(1, min(raw, config.players))


def active_tier_count(tiers_requested: int, total_winners: int) -> int:
    # Every open tier must be able to hold at least one winner.
    requested = max(1, min(tiers_requested, MAX_TIERS))
    return min(requested, total_winners)


def _power(base: Fraction, exponent: int) -> Fraction:
    # x ** 0 is 1 for every x, 0 ** 0 included.
    if exponent == 0:
        return Fraction(1)
    return base**exponent


def player_weights(style: DistributionStyle, mult: float, num_tiers: int) -> list[Fraction]:
    """Relative share of the non-baseline winners per tier, top tier first.

    Linear and multiplier styles grow toward the lowest tier, so the bulk of
    the winners sit at the bottom.
    """
    match style:
        case DistributionStyle.LINEAR:
            return [Fraction(i + 1) for i in range(num_tiers)]
        case DistributionStyle.MULTIPLIER:
            return [_power(Fraction(mult), i) for i in range(num_tiers)]
        case _:
            return [Fraction(1)] * num_tiers


def prize_weights(style: DistributionStyle, mult: float, num_tiers: int) -> list[Fraction]:
    """Per-player prize weight per tier, top tier first and heaviest."""
    match style:
        case DistributionStyle.LINEAR:
            return [Fraction(num_tiers - i) for i in range(num_tiers)]
        case DistributionStyle.MULTIPLIER:
            return [_power(Fraction(mult), num_tiers - 1 - i) for i in range(num_tiers)]
        case _:
            return [Fraction(1)] * num_tiers


def distribute_players(total_winners: int, weights: Sequence[Fraction]) -> list[int]:
    """One guaranteed winner per tier, the rest apportioned by weight."""
    remaining = total_winners - len(weights)
    if remaining <= 0:
        return [1] * len(weights)
    extra = largest_remainder(remaining, weights)
    return [1 + n for n in extra]


def to_minor_units(amount: float) -> int:
    # Half-up rounding; amounts reaching here are positive.
    return math.floor(Fraction(amount) * MINOR_UNITS_PER_MAJOR + Fraction(1, 2))


def _display_weight(weight: Fraction) -> float:
    try:
        return float(weight)
    except OverflowError:
        return math.inf


def distribute_prize(
    counts: Sequence[int], weights: Sequence[Fraction], total_minor: int
) -> Result[list[int], ZeroShareError]:
    """Per-player payout in minor units for each tier.

    A single share is worth ``floor(total_minor / total_shares)`` units and a
    tier's players each receive ``floor(share * weight)``. Whatever those
    floors leave behind is the caller's leftover.
    """
    total_shares = sum((c * w for c, w in zip(counts, weights, strict=True)), Fraction(0))
    logger.debug("Total prize shares: %s", total_shares)
    if total_shares <= 0:
        return Err(
            ZeroShareError(
                message="Calculation Error: 0 Shares",
                total_shares=float(total_shares),
            )
        )
    unit_per_share = math.floor(total_minor / total_shares)
    return Ok([math.floor(unit_per_share * w) for w in weights])
