"""Factor adjustment combination and reference providers."""

from .combine import ResolvedFactors, aggregate_confidence, combine_rate, resolve_factors
from .providers import (
    BallparkFactors,
    ballpark_adjustment,
    is_dome,
    matchup_adjustment,
    matchup_confidence,
    opponent_adjustment,
    platoon_adjustment,
    recent_form_adjustment,
    weather_adjustment,
    weather_factor,
)

__all__ = [
    "BallparkFactors",
    "ResolvedFactors",
    "aggregate_confidence",
    "ballpark_adjustment",
    "combine_rate",
    "is_dome",
    "matchup_adjustment",
    "matchup_confidence",
    "opponent_adjustment",
    "platoon_adjustment",
    "recent_form_adjustment",
    "resolve_factors",
    "weather_adjustment",
    "weather_factor",
]
