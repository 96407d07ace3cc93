from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from mlbdfs.models.projection import Projection


class ScoringTableResponse(BaseModel):
    site: str
    name: str
    batter: Dict[str, float]
    pitcher: Dict[str, float]


class CareerRequest(BaseModel):
    splits: List[Any] = Field(default_factory=list)


class ScoringTablePayload(BaseModel):
    site: str = "CUSTOM"
    name: str = "Custom scoring"
    batter: Dict[str, float] = Field(default_factory=dict)
    pitcher: Dict[str, float] = Field(default_factory=dict)


class SlateProjectionRequest(BaseModel):
    players: List[Any] = Field(default_factory=list)
    scoring: ScoringTablePayload | None = None
    kind: Literal["batter", "pitcher"] | None = None
    min_confidence: float | None = Field(default=None, ge=0.0, le=100.0)
    min_expected: float | None = None
    min_value: float | None = Field(default=None, ge=0.0)
    include_teams: List[str] | None = None
    exclude_teams: List[str] | None = None
    limit: int | None = Field(default=None, ge=1, le=1000)
    sort_by: Literal["expected", "floor", "ceiling", "confidence", "value"] = "expected"
    sort_direction: Literal["asc", "desc"] = "desc"


class SlateSummaryResponse(BaseModel):
    available: int
    selected: int
    expected_mean: float | None
    expected_median: float | None
    expected_std: float | None
    confidence_mean: float | None
    value_mean: float | None
    top_tier_threshold: float | None
    mid_tier_threshold: float | None


class RankedProjectionResponse(BaseModel):
    rank: int
    tier: Literal["top", "mid", "low"]
    value: float | None
    projection: Projection


class SkippedEntryResponse(BaseModel):
    index: int
    player_id: str | None
    reason: str


class SlateProjectionResponse(BaseModel):
    site: str
    pool_summary: SlateSummaryResponse
    summary: SlateSummaryResponse
    projections: List[RankedProjectionResponse]
    skipped: List[SkippedEntryResponse]
