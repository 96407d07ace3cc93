"""Tunable projection parameters, confidence weights and league baselines."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field, replace
from typing import Callable, Mapping, Tuple, TypeVar

from mlbdfs.models.factors import FactorKind


logger = logging.getLogger(__name__)

N = TypeVar("N", int, float)

FLOOR_SPREAD_ENV = "MLBDFS_FLOOR_SPREAD"
CEILING_SPREAD_ENV = "MLBDFS_CEILING_SPREAD"
WORKERS_ENV = "MLBDFS_WORKERS"

BINARY_CATEGORIES: Tuple[str, ...] = ("win", "complete_game", "complete_game_shutout", "no_hitter")


def _env_number(name: str, default: N, parse: Callable[[str], N], *, low: N | None = None, high: N | None = None) -> N:
    """Read a numeric override from ``name``, bounded to ``[low, high]``.

    Unset leaves ``default``; an unparseable or non-finite value logs a
    warning and also leaves ``default``.
    """

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = parse(raw.strip())
    except ValueError:
        value = None
    if value is None or not math.isfinite(value):
        logger.warning("Ignoring %s=%r; using default %s", name, raw, default)
        return default
    if low is not None and value < low:
        logger.info("Raising %s=%s to %s", name, value, low)
        value = low
    if high is not None and value > high:
        logger.info("Lowering %s=%s to %s", name, value, high)
        value = high
    return value


def _env_float(name: str, default: float, *, low: float | None = None, high: float | None = None) -> float:
    return _env_number(name, default, float, low=low, high=high)


def _env_int(name: str, default: int, *, low: int | None = None) -> int:
    return _env_number(name, default, int, low=low)


def _check_spread(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value!r}")


@dataclass(frozen=True)
class ProjectionSettings:
    """Band widths and opportunity assumptions for the projection builder.

    ``floor_spread`` and ``ceiling_spread`` are fractional moves applied to
    every per-opportunity rate; ``spread_overrides`` maps a scoring category to
    its own ``(floor, ceiling)`` pair.
    """

    floor_spread: float = 0.35
    ceiling_spread: float = 0.45
    spread_overrides: Mapping[str, Tuple[float, float]] = field(default_factory=dict)
    plate_appearances_by_slot: Tuple[float, ...] = (4.65, 4.55, 4.45, 4.35, 4.25, 4.15, 4.05, 3.9, 3.75)
    default_plate_appearances: float = 4.2
    full_sample_plate_appearances: float = 300.0
    full_sample_innings: float = 100.0
    estimated_batters_faced_penalty: float = 0.9
    max_outs: int = 27
    default_outs_per_start: float = 16.5
    no_hitter_share: float = 0.2

    def __post_init__(self) -> None:
        _check_spread("floor_spread", self.floor_spread)
        _check_spread("ceiling_spread", self.ceiling_spread)
        for category, (low, high) in self.spread_overrides.items():
            _check_spread(f"spread_overrides[{category!r}] floor", low)
            _check_spread(f"spread_overrides[{category!r}] ceiling", high)
        if len(self.plate_appearances_by_slot) != 9:
            raise ValueError("plate_appearances_by_slot must list nine lineup slots")
        if self.max_outs <= 0:
            raise ValueError("max_outs must be positive")
        if not 0.0 <= self.no_hitter_share <= 1.0:
            raise ValueError("no_hitter_share must be within [0, 1]")
        if not 0.0 <= self.estimated_batters_faced_penalty <= 1.0:
            raise ValueError("estimated_batters_faced_penalty must be within [0, 1]")

    def spread_for(self, category: str) -> Tuple[float, float]:
        return self.spread_overrides.get(category, (self.floor_spread, self.ceiling_spread))

    def plate_appearances_for(self, lineup_slot: int | None) -> float:
        if lineup_slot is None or not 1 <= lineup_slot <= 9:
            return self.default_plate_appearances
        return self.plate_appearances_by_slot[lineup_slot - 1]

    @classmethod
    def from_env(cls, base: "ProjectionSettings | None" = None) -> "ProjectionSettings":
        base = base or cls()
        return replace(
            base,
            floor_spread=_env_float(FLOOR_SPREAD_ENV, base.floor_spread, low=0.0, high=1.0),
            ceiling_spread=_env_float(CEILING_SPREAD_ENV, base.ceiling_spread, low=0.0, high=1.0),
        )


@dataclass(frozen=True)
class ConfidenceWeights:
    """Relative weight of the baseline sample and each factor's confidence."""

    sample: float = 0.45
    ballpark: float = 0.10
    weather: float = 0.10
    platoon: float = 0.10
    matchup: float = 0.15
    opponent: float = 0.05
    recent_form: float = 0.05

    def __post_init__(self) -> None:
        for name in ("sample", *(kind.value for kind in FactorKind)):
            if getattr(self, name) < 0:
                raise ValueError(f"Confidence weight {name!r} must be non-negative")
        if self.total <= 0:
            raise ValueError("Confidence weights must not all be zero")

    def weight_for(self, kind: FactorKind | str) -> float:
        return getattr(self, FactorKind(kind).value)

    @property
    def total(self) -> float:
        return self.sample + sum(self.weight_for(kind) for kind in FactorKind)


@dataclass(frozen=True)
class LeagueBaselines:
    """League-average rates. Batter rates are per plate appearance,
    pitcher rates per batter faced."""

    avg: float = 0.250
    obp: float = 0.320
    slg: float = 0.400
    ops: float = 0.720
    batter_k_rate: float = 0.225
    batter_bb_rate: float = 0.085
    pitcher_bb_rate: float = 0.085
    pitcher_hit_rate: float = 0.225
    pitcher_hr_rate: float = 0.030
    era: float = 4.20
    whip: float = 1.30


DEFAULT_SETTINGS = ProjectionSettings()
DEFAULT_WEIGHTS = ConfidenceWeights()
DEFAULT_BASELINES = LeagueBaselines()
