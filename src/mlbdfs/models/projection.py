"""Points breakdowns and player projections."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .factors import FactorAdjustment, FactorKind


class BatterPointsBreakdown(BaseModel):
    """Event counts for a batter line and the points each category earned."""

    singles: float = Field(default=0.0, ge=0.0)
    doubles: float = Field(default=0.0, ge=0.0)
    triples: float = Field(default=0.0, ge=0.0)
    home_runs: float = Field(default=0.0, ge=0.0)
    rbi: float = Field(default=0.0, ge=0.0)
    runs: float = Field(default=0.0, ge=0.0)
    walks: float = Field(default=0.0, ge=0.0)
    hit_by_pitch: float = Field(default=0.0, ge=0.0)
    stolen_bases: float = Field(default=0.0, ge=0.0)
    points: Dict[str, float] = Field(default_factory=dict)
    total_points: float = 0.0

    model_config = ConfigDict(frozen=True)


class PitcherPointsBreakdown(BaseModel):
    """Event counts for a pitcher line and the points each category earned."""

    outs: float = Field(default=0.0, ge=0.0)
    strikeouts: float = Field(default=0.0, ge=0.0)
    wins: float = Field(default=0.0, ge=0.0)
    earned_runs: float = Field(default=0.0, ge=0.0)
    hits_allowed: float = Field(default=0.0, ge=0.0)
    walks_allowed: float = Field(default=0.0, ge=0.0)
    hit_batsmen: float = Field(default=0.0, ge=0.0)
    complete_games: float = Field(default=0.0, ge=0.0)
    complete_game_shutouts: float = Field(default=0.0, ge=0.0)
    no_hitters: float = Field(default=0.0, ge=0.0)
    points: Dict[str, float] = Field(default_factory=dict)
    total_points: float = 0.0

    model_config = ConfigDict(frozen=True)

    @property
    def innings(self) -> float:
        return self.outs / 3


PointsBreakdown = Union[BatterPointsBreakdown, PitcherPointsBreakdown]


class PlayerContext(BaseModel):
    """Identity and matchup context a projection is attached to."""

    player_id: str = Field(..., min_length=1)
    name: str
    team: Optional[str] = None
    opponent: Optional[str] = None
    game_date: Optional[date] = None
    venue: Optional[str] = None
    handedness: Optional[Literal["L", "R", "S"]] = None
    opposing_handedness: Optional[Literal["L", "R"]] = None
    salary: Optional[int] = Field(default=None, ge=0)
    lineup_slot: Optional[int] = Field(default=None, ge=1, le=9)

    model_config = ConfigDict(frozen=True)


class Projection(BaseModel):
    """Expected/floor/ceiling scenarios for one player and game."""

    kind: Literal["batter", "pitcher"]
    context: PlayerContext
    site: str
    expected: Union[BatterPointsBreakdown, PitcherPointsBreakdown]
    floor: Union[BatterPointsBreakdown, PitcherPointsBreakdown]
    ceiling: Union[BatterPointsBreakdown, PitcherPointsBreakdown]
    confidence: float = Field(..., ge=0.0, le=100.0)
    factors: List[FactorAdjustment] = Field(default_factory=list)
    substituted_factors: List[FactorKind] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def expected_points(self) -> float:
        return self.expected.total_points

    @property
    def floor_points(self) -> float:
        return self.floor.total_points

    @property
    def ceiling_points(self) -> float:
        return self.ceiling.total_points

    @property
    def value(self) -> float | None:
        """Expected points per $1000 of salary."""

        salary = self.context.salary
        if not salary:
            return None
        return self.expected_points / (salary / 1000)
