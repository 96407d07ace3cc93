"""Scoring tables for supported DFS sites."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Tuple


BATTER_CATEGORIES: Tuple[str, ...] = (
    "single",
    "double",
    "triple",
    "home_run",
    "rbi",
    "run",
    "walk",
    "hit_by_pitch",
    "stolen_base",
)

PITCHER_CATEGORIES: Tuple[str, ...] = (
    "out",
    "strikeout",
    "win",
    "earned_run",
    "hit_against",
    "walk_against",
    "hit_batsman",
    "complete_game",
    "complete_game_shutout",
    "no_hitter",
)

# Scoring category -> breakdown/event-count field.
BATTER_CATEGORY_FIELDS: Mapping[str, str] = {
    "single": "singles",
    "double": "doubles",
    "triple": "triples",
    "home_run": "home_runs",
    "rbi": "rbi",
    "run": "runs",
    "walk": "walks",
    "hit_by_pitch": "hit_by_pitch",
    "stolen_base": "stolen_bases",
}

PITCHER_CATEGORY_FIELDS: Mapping[str, str] = {
    "out": "outs",
    "strikeout": "strikeouts",
    "win": "wins",
    "earned_run": "earned_runs",
    "hit_against": "hits_allowed",
    "walk_against": "walks_allowed",
    "hit_batsman": "hit_batsmen",
    "complete_game": "complete_games",
    "complete_game_shutout": "complete_game_shutouts",
    "no_hitter": "no_hitters",
}


class ScoringConfigError(ValueError):
    """Raised when a scoring table is missing or misdefines categories."""


def _validate_section(site: str, section: str, values: Mapping[str, float], required: Tuple[str, ...]) -> None:
    missing = [category for category in required if category not in values]
    if missing:
        raise ScoringConfigError(f"Scoring table {site!r} missing {section} categories: {', '.join(missing)}")
    unknown = sorted(set(values) - set(required))
    if unknown:
        raise ScoringConfigError(f"Scoring table {site!r} has unknown {section} categories: {', '.join(unknown)}")
    for category, value in values.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ScoringConfigError(
                f"Scoring table {site!r} has invalid value for {section} category {category!r}: {value!r}"
            )


@dataclass(frozen=True)
class ScoringTable:
    """Points per event for each batter and pitcher category."""

    site: str
    name: str
    batter: Dict[str, float] = field(default_factory=dict)
    pitcher: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _validate_section(self.site, "batter", self.batter, BATTER_CATEGORIES)
        _validate_section(self.site, "pitcher", self.pitcher, PITCHER_CATEGORIES)
        object.__setattr__(self, "batter", {key: float(self.batter[key]) for key in BATTER_CATEGORIES})
        object.__setattr__(self, "pitcher", {key: float(self.pitcher[key]) for key in PITCHER_CATEGORIES})

    def values_for(self, kind: str) -> Dict[str, float]:
        if kind == "batter":
            return self.batter
        if kind == "pitcher":
            return self.pitcher
        raise KeyError(f"Unknown player kind {kind!r}")


_SCORING_TABLES: Dict[str, ScoringTable] = {
    "DK": ScoringTable(
        site="DK",
        name="DraftKings MLB Classic",
        batter={
            "single": 3.0,
            "double": 5.0,
            "triple": 8.0,
            "home_run": 10.0,
            "rbi": 2.0,
            "run": 2.0,
            "walk": 2.0,
            "hit_by_pitch": 2.0,
            "stolen_base": 5.0,
        },
        pitcher={
            "out": 0.75,
            "strikeout": 2.0,
            "win": 4.0,
            "earned_run": -2.0,
            "hit_against": -0.6,
            "walk_against": -0.6,
            "hit_batsman": -0.6,
            "complete_game": 2.5,
            "complete_game_shutout": 2.5,
            "no_hitter": 5.0,
        },
    ),
    "FD": ScoringTable(
        site="FD",
        name="FanDuel MLB",
        batter={
            "single": 3.0,
            "double": 6.0,
            "triple": 9.0,
            "home_run": 12.0,
            "rbi": 3.5,
            "run": 3.2,
            "walk": 3.0,
            "hit_by_pitch": 3.0,
            "stolen_base": 6.0,
        },
        pitcher={
            "out": 1.0,
            "strikeout": 3.0,
            "win": 6.0,
            "earned_run": -3.0,
            "hit_against": 0.0,
            "walk_against": 0.0,
            "hit_batsman": 0.0,
            "complete_game": 0.0,
            "complete_game_shutout": 0.0,
            "no_hitter": 0.0,
        },
    ),
}


def iter_tables() -> Iterable[ScoringTable]:
    """Return an iterator of all configured scoring tables."""

    return _SCORING_TABLES.values()


def get_table(site: str) -> ScoringTable:
    """Fetch the table for a site, raising KeyError if missing."""

    key = site.upper()
    if key not in _SCORING_TABLES:
        raise KeyError(f"No scoring table configured for site={site!r}")
    return _SCORING_TABLES[key]


def get_table_by_key(site_key: str) -> ScoringTable:
    """Resolve a table from either "SITE" or "SITE_MLB"."""

    if not isinstance(site_key, str):
        raise TypeError("site_key must be a str")

    site, _, sport = site_key.strip().partition("_")
    if sport and sport.upper() != "MLB":
        raise KeyError(f"No scoring table configured for sport={sport!r}")
    return get_table(site)


def register_table(table: ScoringTable, *, replace: bool = False) -> ScoringTable:
    key = table.site.upper()
    if key in _SCORING_TABLES and not replace:
        raise ScoringConfigError(f"Scoring table {key!r} is already registered")
    _SCORING_TABLES[key] = table
    return table
