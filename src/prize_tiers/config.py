from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from prize_tiers.domain.allocation import MAX_TIERS, AllocationConfig, DistributionStyle, WinnerMode


class AppConfig(Protocol):
    def __getitem__(self, key: str) -> object: ...


class PoolConfigError(Exception):
    """Raised when pool settings hold a value that cannot be interpreted."""


_DEFAULTS: dict[str, object] = {
    "pool": {
        "prize": 1000,
        "players": 100,
        "winner_mode": "fixed",
        "winners_val": 10,
        "tiers_requested": MAX_TIERS,
        "prize_style": "equal",
        "prize_mult": 2,
        "player_style": "equal",
        "player_mult": 2,
    },
    "display": {
        "currency_symbol": "£",
    },
}


def create_config(
    yaml_path: str = "prize_tiers.yaml",
    env_prefix: str = "PRIZE_TIERS",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file. A missing file is ignored.
        env_prefix: Prefix for environment variables, e.g. ``PRIZE_TIERS__POOL__PRIZE``.
        defaults: Default configuration values.
        overrides: Nested values taking precedence over every other layer.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


# -- Coercion ----------------------------------------------------------------
# Form-style inputs: anything that does not parse as a number falls back to a
# fixed default instead of failing.


def _coerce_float(value: object, default: float) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return default if math.isnan(number) else number


def _coerce_int(value: object, default: int) -> int:
    number = _coerce_float(value, float(default))
    if not math.isfinite(number):
        return default
    return int(number)


def _parse_enum[E: StrEnum](enum_type: type[E], key: str, raw: object) -> E:
    try:
        return enum_type(str(raw).strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_type)
        raise PoolConfigError(f"pool.{key}: invalid value '{raw}' (expected one of: {choices})") from None


# -- Loading -----------------------------------------------------------------


def load_allocation_config(cfg: AppConfig) -> AllocationConfig:
    """Build the engine input from the ``pool`` section of a configuration."""
    return AllocationConfig(
        prize=_coerce_float(cfg["pool.prize"], 0.0),
        players=_coerce_int(cfg["pool.players"], 0),
        winner_mode=_parse_enum(WinnerMode, "winner_mode", cfg["pool.winner_mode"]),
        winners_val=_coerce_float(cfg["pool.winners_val"], 0.0),
        tiers_requested=_coerce_int(cfg["pool.tiers_requested"], MAX_TIERS),
        prize_style=_parse_enum(DistributionStyle, "prize_style", cfg["pool.prize_style"]),
        prize_mult=_coerce_float(cfg["pool.prize_mult"], 1.0),
        player_style=_parse_enum(DistributionStyle, "player_style", cfg["pool.player_style"]),
        player_mult=_coerce_float(cfg["pool.player_mult"], 1.0),
    )


@dataclass(frozen=True)
class DisplaySettings:
    currency_symbol: str


def load_display_settings(cfg: AppConfig) -> DisplaySettings:
    return DisplaySettings(currency_symbol=str(cfg["display.currency_symbol"]))
