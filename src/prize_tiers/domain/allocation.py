from dataclasses import dataclass
from enum import StrEnum
from typing import Any

MINOR_UNITS_PER_MAJOR = 100

# Highest rank first. A pool never opens more tiers than there are names.
TIER_NAMES: tuple[str, ...] = ("Diamond", "Platinum", "Gold", "Silver", "Bronze")
MAX_TIERS = len(TIER_NAMES)


class WinnerMode(StrEnum):
    FIXED = "fixed"
    PERCENT = "percent"


class DistributionStyle(StrEnum):
    EQUAL = "equal"
    LINEAR = "linear"
    MULTIPLIER = "multiplier"


@dataclass(frozen=True)
class AllocationConfig:
    prize: float
    players: int
    winner_mode: WinnerMode = WinnerMode.FIXED
    winners_val: float = 1.0
    tiers_requested: int = MAX_TIERS
    prize_style: DistributionStyle = DistributionStyle.EQUAL
    prize_mult: float = 1.0
    player_style: DistributionStyle = DistributionStyle.EQUAL
    player_mult: float = 1.0


@dataclass(frozen=True)
class Tier:
    name: str
    count: int
    weight: float
    payout_minor: int

    @property
    def payout(self) -> float:
        """Per-player payout in major units, for display only."""
        return self.payout_minor / MINOR_UNITS_PER_MAJOR

    @property
    def total_minor(self) -> int:
        return self.payout_minor * self.count


@dataclass(frozen=True)
class Allocation:
    prize: float
    players: int
    total_winners: int
    tiers: tuple[Tier, ...]
    leftover: int  # minor units

    @property
    def num_tiers(self) -> int:
        return len(self.tiers)

    @property
    def distributed_minor_units(self) -> int:
        return sum(t.total_minor for t in self.tiers)

    @property
    def total_minor_units(self) -> int:
        return self.distributed_minor_units + self.leftover

    def to_dict(self) -> dict[str, Any]:
        return {
            "prize": self.prize,
            "players": self.players,
            "totalWinners": self.total_winners,
            "tiers": [
                {"name": t.name, "count": t.count, "weight": t.weight, "payout": t.payout} for t in self.tiers
            ],
            "leftover": self.leftover,
        }
