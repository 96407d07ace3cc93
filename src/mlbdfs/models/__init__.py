"""Shared value types for raw input, normalized stats and projections."""

from .factors import FACTOR_MODES, FactorAdjustment, FactorKind, FactorMode
from .projection import (
    BatterPointsBreakdown,
    PitcherPointsBreakdown,
    PlayerContext,
    PointsBreakdown,
    Projection,
)
from .raw import RawSeasonStat
from .stats import (
    BATTER_COUNT_FIELDS,
    PITCHER_COUNT_FIELDS,
    BatterStats,
    CareerProfile,
    PitcherStats,
    StatLine,
)

__all__ = [
    "BATTER_COUNT_FIELDS",
    "PITCHER_COUNT_FIELDS",
    "BatterPointsBreakdown",
    "BatterStats",
    "CareerProfile",
    "FACTOR_MODES",
    "FactorAdjustment",
    "FactorKind",
    "FactorMode",
    "PitcherPointsBreakdown",
    "PitcherStats",
    "PlayerContext",
    "PointsBreakdown",
    "Projection",
    "RawSeasonStat",
    "StatLine",
]
