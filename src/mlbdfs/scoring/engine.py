"""Apply a scoring table to event counts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from mlbdfs.config.scoring import (
    BATTER_CATEGORIES,
    BATTER_CATEGORY_FIELDS,
    PITCHER_CATEGORIES,
    PITCHER_CATEGORY_FIELDS,
    ScoringTable,
)
from mlbdfs.models.projection import BatterPointsBreakdown, PitcherPointsBreakdown


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatterEventCounts:
    """Batter events for one game. Fractional values are expected counts.

    Singles are not stored; they are ``hits`` minus extra-base hits.
    """

    hits: float = 0.0
    doubles: float = 0.0
    triples: float = 0.0
    home_runs: float = 0.0
    rbi: float = 0.0
    runs: float = 0.0
    walks: float = 0.0
    hit_by_pitch: float = 0.0
    stolen_bases: float = 0.0

    @property
    def singles(self) -> float:
        return self.hits - self.doubles - self.triples - self.home_runs


@dataclass(frozen=True)
class PitcherEventCounts:
    """Pitcher events for one game. Fractional values are expected counts."""

    outs: float = 0.0
    strikeouts: float = 0.0
    wins: float = 0.0
    earned_runs: float = 0.0
    hits_allowed: float = 0.0
    walks_allowed: float = 0.0
    hit_batsmen: float = 0.0
    complete_games: float = 0.0
    complete_game_shutouts: float = 0.0
    no_hitters: float = 0.0

    @classmethod
    def for_game(
        cls,
        *,
        outs: int,
        strikeouts: int = 0,
        win: bool = False,
        earned_runs: int = 0,
        hits_allowed: int = 0,
        walks_allowed: int = 0,
        hit_batsmen: int = 0,
        complete_game: bool = False,
    ) -> "PitcherEventCounts":
        """Build from a single game line, deriving the shutout and no-hitter bonuses.

        A complete game with no earned runs is also a shutout, and with no
        hits also a no-hitter; each bonus stacks on the complete-game bonus.
        """

        shutout = complete_game and earned_runs == 0
        no_hitter = complete_game and hits_allowed == 0
        return cls(
            outs=outs,
            strikeouts=strikeouts,
            wins=1.0 if win else 0.0,
            earned_runs=earned_runs,
            hits_allowed=hits_allowed,
            walks_allowed=walks_allowed,
            hit_batsmen=hit_batsmen,
            complete_games=1.0 if complete_game else 0.0,
            complete_game_shutouts=1.0 if shutout else 0.0,
            no_hitters=1.0 if no_hitter else 0.0,
        )


def _non_negative(name: str, value: float) -> float:
    if value < 0:
        logger.debug("Clamping negative %s count %.3f to 0", name, value)
        return 0.0
    return value


def score_batter(counts: BatterEventCounts, table: ScoringTable) -> BatterPointsBreakdown:
    """Score a batter line. ``total_points`` is the sum of ``points``."""

    values = {
        "singles": _non_negative("singles", counts.singles),
        **{
            item.name: _non_negative(item.name, getattr(counts, item.name))
            for item in fields(counts)
            if item.name != "hits"
        },
    }
    points = {
        category: values[BATTER_CATEGORY_FIELDS[category]] * table.batter[category]
        for category in BATTER_CATEGORIES
    }
    return BatterPointsBreakdown(**values, points=points, total_points=sum(points.values()))


def score_pitcher(counts: PitcherEventCounts, table: ScoringTable) -> PitcherPointsBreakdown:
    """Score a pitcher line. ``total_points`` is the sum of ``points``."""

    values = {item.name: _non_negative(item.name, getattr(counts, item.name)) for item in fields(counts)}
    points = {
        category: values[PITCHER_CATEGORY_FIELDS[category]] * table.pitcher[category]
        for category in PITCHER_CATEGORIES
    }
    return PitcherPointsBreakdown(**values, points=points, total_points=sum(points.values()))
