"""Normalized batter/pitcher stat records and career profiles.

Every rate field on these models is derived from the counting fields through
``from_counts``. Both the normalizer and the aggregator go through that
constructor so the formulas live in exactly one place.
"""

from __future__ import annotations

from typing import Dict, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from mlbdfs.numeric import safe_div


BATTER_COUNT_FIELDS: tuple[str, ...] = (
    "games_played",
    "at_bats",
    "plate_appearances",
    "hits",
    "doubles",
    "triples",
    "home_runs",
    "runs",
    "rbi",
    "walks",
    "strikeouts",
    "stolen_bases",
    "caught_stealing",
    "hit_by_pitch",
    "sacrifice_flies",
)

PITCHER_COUNT_FIELDS: tuple[str, ...] = (
    "games_played",
    "games_started",
    "outs",
    "wins",
    "losses",
    "saves",
    "holds",
    "blown_saves",
    "quality_starts",
    "complete_games",
    "shutouts",
    "strikeouts",
    "walks",
    "hits_allowed",
    "home_runs_allowed",
    "earned_runs",
    "hit_batsmen",
    "batters_faced",
)


class BatterStats(BaseModel):
    """Fully populated batting line. Counts are non-negative, rates derived."""

    games_played: int = Field(default=0, ge=0)
    at_bats: int = Field(default=0, ge=0)
    plate_appearances: int = Field(default=0, ge=0)
    hits: int = Field(default=0, ge=0)
    doubles: int = Field(default=0, ge=0)
    triples: int = Field(default=0, ge=0)
    home_runs: int = Field(default=0, ge=0)
    runs: int = Field(default=0, ge=0)
    rbi: int = Field(default=0, ge=0)
    walks: int = Field(default=0, ge=0)
    strikeouts: int = Field(default=0, ge=0)
    stolen_bases: int = Field(default=0, ge=0)
    caught_stealing: int = Field(default=0, ge=0)
    hit_by_pitch: int = Field(default=0, ge=0)
    sacrifice_flies: int = Field(default=0, ge=0)

    singles: int = Field(default=0, ge=0)
    total_bases: int = Field(default=0, ge=0)
    avg: float = 0.0
    obp: float = 0.0
    slg: float = 0.0
    ops: float = 0.0
    iso: float = 0.0
    babip: float = 0.0
    hr_rate: float = 0.0
    k_rate: float = 0.0
    bb_rate: float = 0.0
    sb_rate: float = 0.0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_counts(
        cls,
        *,
        games_played: int = 0,
        at_bats: int = 0,
        plate_appearances: int = 0,
        hits: int = 0,
        doubles: int = 0,
        triples: int = 0,
        home_runs: int = 0,
        runs: int = 0,
        rbi: int = 0,
        walks: int = 0,
        strikeouts: int = 0,
        stolen_bases: int = 0,
        caught_stealing: int = 0,
        hit_by_pitch: int = 0,
        sacrifice_flies: int = 0,
    ) -> "BatterStats":
        singles = max(0, hits - doubles - triples - home_runs)
        total_bases = singles + 2 * doubles + 3 * triples + 4 * home_runs
        avg = safe_div(hits, at_bats)
        obp = safe_div(hits + walks + hit_by_pitch, plate_appearances)
        slg = safe_div(total_bases, at_bats)
        balls_in_play = at_bats - strikeouts - home_runs + sacrifice_flies
        return cls(
            games_played=games_played,
            at_bats=at_bats,
            plate_appearances=plate_appearances,
            hits=hits,
            doubles=doubles,
            triples=triples,
            home_runs=home_runs,
            runs=runs,
            rbi=rbi,
            walks=walks,
            strikeouts=strikeouts,
            stolen_bases=stolen_bases,
            caught_stealing=caught_stealing,
            hit_by_pitch=hit_by_pitch,
            sacrifice_flies=sacrifice_flies,
            singles=singles,
            total_bases=total_bases,
            avg=avg,
            obp=obp,
            slg=slg,
            ops=obp + slg,
            iso=slg - avg,
            babip=safe_div(max(0, hits - home_runs), balls_in_play),
            hr_rate=safe_div(home_runs, at_bats),
            k_rate=safe_div(strikeouts, plate_appearances),
            bb_rate=safe_div(walks, plate_appearances),
            sb_rate=safe_div(stolen_bases, games_played),
        )

    @classmethod
    def empty(cls) -> "BatterStats":
        return cls.from_counts()

    def counts(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in BATTER_COUNT_FIELDS}


class PitcherStats(BaseModel):
    """Fully populated pitching line.

    ``outs`` is the canonical innings measure; ``innings_decimal`` is always
    ``outs / 3`` and ``innings_pitched`` re-encodes it in box-score notation
    (``183.2`` meaning 183 and two thirds). ``batters_faced_estimated`` is set
    when batters faced was approximated from innings rather than reported.
    """

    games_played: int = Field(default=0, ge=0)
    games_started: int = Field(default=0, ge=0)
    outs: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    saves: int = Field(default=0, ge=0)
    holds: int = Field(default=0, ge=0)
    blown_saves: int = Field(default=0, ge=0)
    quality_starts: int = Field(default=0, ge=0)
    complete_games: int = Field(default=0, ge=0)
    shutouts: int = Field(default=0, ge=0)
    strikeouts: int = Field(default=0, ge=0)
    walks: int = Field(default=0, ge=0)
    hits_allowed: int = Field(default=0, ge=0)
    home_runs_allowed: int = Field(default=0, ge=0)
    earned_runs: int = Field(default=0, ge=0)
    hit_batsmen: int = Field(default=0, ge=0)
    batters_faced: float = Field(default=0.0, ge=0.0)
    batters_faced_estimated: bool = False

    innings_pitched: float = 0.0
    innings_decimal: float = 0.0
    era: float = 0.0
    whip: float = 0.0
    k_rate: float = 0.0
    bb_rate: float = 0.0
    k9: float = 0.0
    bb9: float = 0.0
    hr9: float = 0.0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_counts(
        cls,
        *,
        games_played: int = 0,
        games_started: int = 0,
        outs: int = 0,
        wins: int = 0,
        losses: int = 0,
        saves: int = 0,
        holds: int = 0,
        blown_saves: int = 0,
        quality_starts: int = 0,
        complete_games: int = 0,
        shutouts: int = 0,
        strikeouts: int = 0,
        walks: int = 0,
        hits_allowed: int = 0,
        home_runs_allowed: int = 0,
        earned_runs: int = 0,
        hit_batsmen: int = 0,
        batters_faced: float = 0.0,
        batters_faced_estimated: bool = False,
    ) -> "PitcherStats":
        innings = outs / 3
        return cls(
            games_played=games_played,
            games_started=games_started,
            outs=outs,
            wins=wins,
            losses=losses,
            saves=saves,
            holds=holds,
            blown_saves=blown_saves,
            quality_starts=quality_starts,
            complete_games=complete_games,
            shutouts=shutouts,
            strikeouts=strikeouts,
            walks=walks,
            hits_allowed=hits_allowed,
            home_runs_allowed=home_runs_allowed,
            earned_runs=earned_runs,
            hit_batsmen=hit_batsmen,
            batters_faced=batters_faced,
            batters_faced_estimated=batters_faced_estimated,
            innings_pitched=outs // 3 + (outs % 3) / 10,
            innings_decimal=innings,
            era=safe_div(9 * earned_runs, innings),
            whip=safe_div(walks + hits_allowed, innings),
            k_rate=safe_div(strikeouts, batters_faced),
            bb_rate=safe_div(walks, batters_faced),
            k9=safe_div(9 * strikeouts, innings),
            bb9=safe_div(9 * walks, innings),
            hr9=safe_div(9 * home_runs_allowed, innings),
        )

    @classmethod
    def empty(cls) -> "PitcherStats":
        return cls.from_counts()

    def counts(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in PITCHER_COUNT_FIELDS}


StatLine = Union[BatterStats, PitcherStats]


class CareerProfile(BaseModel):
    """Per-season lines keyed by year plus the recomputed career line."""

    kind: Literal["batter", "pitcher"]
    seasons: Dict[str, Union[BatterStats, PitcherStats]] = Field(default_factory=dict)
    career: Union[BatterStats, PitcherStats]

    model_config = ConfigDict(frozen=True)

    @property
    def season_count(self) -> int:
        return len(self.seasons)

    def latest_season(self) -> StatLine | None:
        if not self.seasons:
            return None
        return self.seasons[list(self.seasons)[-1]]
