"""Turn raw slate JSON into projection requests.

This is the only place raw stat payloads enter the pipeline; they are
normalized here exactly once and everything downstream sees
``BatterStats``/``PitcherStats``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, FiniteFloat, ValidationError, field_validator

from mlbdfs.factors.providers import (
    BallparkFactors,
    ballpark_adjustment,
    matchup_adjustment,
    platoon_adjustment,
    weather_adjustment,
)
from mlbdfs.models.factors import FactorAdjustment
from mlbdfs.models.projection import PlayerContext
from mlbdfs.models.stats import BatterStats, PitcherStats
from mlbdfs.normalize.aggregate import build_batter_career, build_pitcher_career
from mlbdfs.normalize.stats import normalize_batter_stats, normalize_pitcher_stats
from mlbdfs.projection.builder import ProjectionRequest


logger = logging.getLogger(__name__)

PlayerKind = Literal["batter", "pitcher"]


class WeatherInput(BaseModel):
    temperature_f: Optional[FiniteFloat] = None
    wind_speed_mph: FiniteFloat = 0.0
    wind_direction: str = ""
    condition: Optional[str] = None
    dome: bool = False


class ParkInput(BaseModel):
    overall: float = Field(default=1.0, gt=0.0, allow_inf_nan=False)
    singles: float = Field(default=1.0, gt=0.0, allow_inf_nan=False)
    doubles: float = Field(default=1.0, gt=0.0, allow_inf_nan=False)
    triples: float = Field(default=1.0, gt=0.0, allow_inf_nan=False)
    home_runs: float = Field(default=1.0, gt=0.0, allow_inf_nan=False)
    runs: float = Field(default=1.0, gt=0.0, allow_inf_nan=False)
    left_handed: float = Field(default=1.0, gt=0.0, allow_inf_nan=False)
    right_handed: float = Field(default=1.0, gt=0.0, allow_inf_nan=False)

    def to_factors(self) -> BallparkFactors:
        return BallparkFactors(**self.model_dump())


class PlayerEntry(BaseModel):
    """Raw description of one player for one game.

    ``stats`` is a single raw season line; ``seasons`` is a list of raw
    season splits rolled into a career line. ``seasons`` wins when both are
    present.
    """

    context: PlayerContext
    stats: Optional[Dict[str, Any]] = None
    seasons: Optional[List[Any]] = None
    opponent: Optional[Dict[str, Any]] = None
    recent: Optional[Dict[str, Any]] = None
    matchup: Optional[Dict[str, Any]] = None
    park: Optional[ParkInput] = None
    weather: Optional[WeatherInput] = None
    factors: List[FactorAdjustment] = Field(default_factory=list)

    @field_validator("factors")
    @classmethod
    def _one_factor_per_kind(cls, factors: List[FactorAdjustment]) -> List[FactorAdjustment]:
        seen = set()
        for adjustment in factors:
            if adjustment.kind in seen:
                raise ValueError(f"Duplicate factor adjustment for kind {adjustment.kind.value!r}")
            seen.add(adjustment.kind)
        return factors

    def _baseline(self, kind: PlayerKind) -> BatterStats | PitcherStats:
        if kind == "batter":
            if self.seasons:
                return build_batter_career(self.seasons).career
            return normalize_batter_stats(self.stats)
        if self.seasons:
            return build_pitcher_career(self.seasons).career
        return normalize_pitcher_stats(self.stats)

    def _environment_factors(self, kind: PlayerKind) -> List[FactorAdjustment]:
        derived: List[FactorAdjustment | None] = []
        batter_hand = self.context.handedness if kind == "batter" else None
        if self.park is not None:
            derived.append(ballpark_adjustment(self.park.to_factors(), batter_hand=batter_hand))
        if self.weather is not None:
            derived.append(
                weather_adjustment(
                    self.weather.temperature_f,
                    self.weather.wind_speed_mph,
                    self.weather.wind_direction,
                    condition=self.weather.condition,
                    dome=self.weather.dome,
                )
            )
        if kind == "batter":
            if self.matchup is not None:
                derived.append(matchup_adjustment(normalize_batter_stats(self.matchup)))
            derived.append(platoon_adjustment(self.context.handedness, self.context.opposing_handedness))

        explicit = {adjustment.kind for adjustment in self.factors}
        factors = list(self.factors)
        for adjustment in derived:
            if adjustment is not None and adjustment.kind not in explicit:
                factors.append(adjustment)
        return factors

    def to_request(self, kind: PlayerKind) -> ProjectionRequest:
        """Normalize every raw payload on this entry and build the request."""

        if kind == "batter":
            opponent = normalize_pitcher_stats(self.opponent) if self.opponent is not None else None
            recent = normalize_batter_stats(self.recent) if self.recent is not None else None
        else:
            opponent = normalize_batter_stats(self.opponent) if self.opponent is not None else None
            recent = normalize_pitcher_stats(self.recent) if self.recent is not None else None
        return ProjectionRequest(
            kind=kind,
            context=self.context,
            stats=self._baseline(kind),
            opponent=opponent,
            recent=recent,
            factors=tuple(self._environment_factors(kind)),
        )


class SlateEntry(PlayerEntry):
    """Slate entry: a ``PlayerEntry`` tagged with the player kind."""

    kind: PlayerKind

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SlateEntry":
        """Validate a raw entry. A top-level ``lineup_slot`` is folded into the context."""

        data = dict(payload)
        context = dict(data.get("context") or {})
        if "lineup_slot" in data and "lineup_slot" not in context:
            context["lineup_slot"] = data.pop("lineup_slot")
        data["context"] = context
        return cls.model_validate(data)

    def to_request(self, kind: PlayerKind | None = None) -> ProjectionRequest:
        return super().to_request(kind or self.kind)


@dataclass(frozen=True)
class SkippedEntry:
    index: int
    player_id: Optional[str]
    reason: str


@dataclass
class SlateLoadResult:
    requests: List[ProjectionRequest] = field(default_factory=list)
    skipped: List[SkippedEntry] = field(default_factory=list)


def _entries(payload: Any) -> Sequence[Any]:
    if isinstance(payload, Mapping):
        players = payload.get("players", [])
        return players if isinstance(players, list) else []
    if isinstance(payload, list):
        return payload
    return []


def parse_slate(payload: Any) -> SlateLoadResult:
    """Convert a slate payload (list of entries or ``{"players": [...]}``)."""

    result = SlateLoadResult()
    for index, raw in enumerate(_entries(payload)):
        if not isinstance(raw, Mapping):
            logger.info("Skipping slate entry %s: not an object", index)
            result.skipped.append(SkippedEntry(index, None, "entry is not an object"))
            continue
        context = raw.get("context")
        player_id = context.get("player_id") if isinstance(context, Mapping) else None
        try:
            entry = SlateEntry.from_payload(raw)
            result.requests.append(entry.to_request())
        except (ValidationError, ValueError, TypeError) as exc:
            reason = str(exc).splitlines()[0]
            logger.info("Skipping slate entry %s (%s): %s", index, player_id, reason)
            result.skipped.append(SkippedEntry(index, player_id, reason))
    return result


def load_slate(path: Path) -> SlateLoadResult:
    payload = json.loads(path.read_text(encoding="utf-8"))
    result = parse_slate(payload)
    logger.info(
        "Loaded %s slate entries from %s (%s skipped)",
        len(result.requests),
        path,
        len(result.skipped),
    )
    return result
