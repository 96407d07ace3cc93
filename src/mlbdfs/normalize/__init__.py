"""Stat normalization and career aggregation."""

from .aggregate import (
    aggregate_batter_stats,
    aggregate_pitcher_stats,
    build_batter_career,
    build_pitcher_career,
)
from .stats import (
    BATTERS_FACED_PER_INNING,
    MAX_COUNT,
    innings_to_decimal,
    normalize_batter_stats,
    normalize_pitcher_stats,
    parse_count,
    parse_innings,
    parse_number,
)

__all__ = [
    "BATTERS_FACED_PER_INNING",
    "MAX_COUNT",
    "aggregate_batter_stats",
    "aggregate_pitcher_stats",
    "build_batter_career",
    "build_pitcher_career",
    "innings_to_decimal",
    "normalize_batter_stats",
    "normalize_pitcher_stats",
    "parse_count",
    "parse_innings",
    "parse_number",
]
