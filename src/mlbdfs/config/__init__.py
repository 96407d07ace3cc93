"""Configuration helpers for scoring tables and projection tuning."""

from .scoring import (
    BATTER_CATEGORIES,
    PITCHER_CATEGORIES,
    ScoringConfigError,
    ScoringTable,
    get_table,
    get_table_by_key,
    iter_tables,
    register_table,
)
from .settings import (
    DEFAULT_BASELINES,
    DEFAULT_SETTINGS,
    DEFAULT_WEIGHTS,
    ConfidenceWeights,
    LeagueBaselines,
    ProjectionSettings,
)

__all__ = [
    "BATTER_CATEGORIES",
    "PITCHER_CATEGORIES",
    "ScoringConfigError",
    "ScoringTable",
    "get_table",
    "get_table_by_key",
    "iter_tables",
    "register_table",
    "DEFAULT_BASELINES",
    "DEFAULT_SETTINGS",
    "DEFAULT_WEIGHTS",
    "ConfidenceWeights",
    "LeagueBaselines",
    "ProjectionSettings",
]
