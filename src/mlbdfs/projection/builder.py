"""Expected/floor/ceiling projections for batters and pitchers.

Each projection works on per-opportunity rates: batters per plate appearance,
pitchers per batter faced (strikeouts, hits, walks, hit batsmen), per out
(earned runs) and per start (outs, wins, complete-game bonuses). Factors
adjust the rates, the floor/ceiling bands move each rate in the direction
that lowers/raises its points, and the scoring engine turns the resulting
counts into points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Sequence, Union

from mlbdfs.config.scoring import BATTER_CATEGORY_FIELDS, ScoringTable, get_table
from mlbdfs.config.settings import (
    BINARY_CATEGORIES,
    DEFAULT_BASELINES,
    DEFAULT_SETTINGS,
    DEFAULT_WEIGHTS,
    ConfidenceWeights,
    LeagueBaselines,
    ProjectionSettings,
)
from mlbdfs.factors.combine import aggregate_confidence, combine_rate, resolve_factors
from mlbdfs.factors.providers import opponent_adjustment, recent_form_adjustment
from mlbdfs.models.factors import FactorAdjustment
from mlbdfs.models.projection import PlayerContext, Projection
from mlbdfs.models.stats import BatterStats, PitcherStats
from mlbdfs.normalize.stats import BATTERS_FACED_PER_INNING
from mlbdfs.numeric import safe_div
from mlbdfs.scoring.engine import BatterEventCounts, PitcherEventCounts, score_batter, score_pitcher


logger = logging.getLogger(__name__)

Scenario = Literal["expected", "floor", "ceiling"]
SCENARIOS: tuple[Scenario, ...] = ("expected", "floor", "ceiling")


def _band_factor(scenario: Scenario, points_per_unit: float, spreads: tuple[float, float]) -> float:
    floor_spread, ceiling_spread = spreads
    favourable = points_per_unit >= 0
    if scenario == "floor":
        return 1.0 - floor_spread if favourable else 1.0 + floor_spread
    if scenario == "ceiling":
        return 1.0 + ceiling_spread if favourable else 1.0 - ceiling_spread
    return 1.0


def _scenario_counts(
    scenario: Scenario,
    rates: Mapping[str, float],
    opportunities: Mapping[str, float],
    points_per_unit: Mapping[str, float],
    settings: ProjectionSettings,
) -> Dict[str, float]:
    counts: Dict[str, float] = {}
    for category, rate in rates.items():
        factor = _band_factor(scenario, points_per_unit[category], settings.spread_for(category))
        count = max(0.0, rate * factor * opportunities[category])
        if category in BINARY_CATEGORIES:
            count = min(1.0, count)
        elif category == "out":
            count = min(float(settings.max_outs), count)
        counts[category] = count
    return counts


def _adjust(rates: Mapping[str, float], adjustments: Sequence[FactorAdjustment]) -> Dict[str, float]:
    return {category: combine_rate(rate, adjustments, category) for category, rate in rates.items()}


def _with_derived(
    factors: Sequence[FactorAdjustment],
    derived: Sequence[FactorAdjustment | None],
) -> list[FactorAdjustment]:
    """Append provider-derived adjustments for kinds the caller did not supply."""

    provided = list(factors)
    kinds = {adjustment.kind for adjustment in provided}
    for adjustment in derived:
        if adjustment is not None and adjustment.kind not in kinds:
            provided.append(adjustment)
            kinds.add(adjustment.kind)
    return provided


def batter_sample_confidence(stats: BatterStats, settings: ProjectionSettings = DEFAULT_SETTINGS) -> float:
    return min(1.0, safe_div(stats.plate_appearances, settings.full_sample_plate_appearances)) * 100


def pitcher_sample_confidence(stats: PitcherStats, settings: ProjectionSettings = DEFAULT_SETTINGS) -> float:
    confidence = min(1.0, safe_div(stats.innings_decimal, settings.full_sample_innings)) * 100
    if stats.batters_faced_estimated:
        confidence *= settings.estimated_batters_faced_penalty
    return confidence


def build_batter_projection(
    context: PlayerContext,
    stats: BatterStats,
    *,
    opponent: PitcherStats | None = None,
    recent: BatterStats | None = None,
    factors: Sequence[FactorAdjustment] = (),
    table: ScoringTable | None = None,
    settings: ProjectionSettings = DEFAULT_SETTINGS,
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
    baselines: LeagueBaselines = DEFAULT_BASELINES,
) -> Projection:
    table = table or get_table("DK")
    resolved = resolve_factors(
        _with_derived(
            factors,
            (
                opponent_adjustment(
                    opponent, baselines, estimated_penalty=settings.estimated_batters_faced_penalty
                ),
                recent_form_adjustment(recent, stats),
            ),
        )
    )

    plate_appearances = settings.plate_appearances_for(context.lineup_slot)
    base_rates = {
        category: safe_div(getattr(stats, name), stats.plate_appearances)
        for category, name in BATTER_CATEGORY_FIELDS.items()
    }
    rates = _adjust(base_rates, resolved.adjustments)
    opportunities = {category: plate_appearances for category in rates}

    breakdowns = {}
    for scenario in SCENARIOS:
        counts = _scenario_counts(scenario, rates, opportunities, table.batter, settings)
        events = BatterEventCounts(
            hits=counts["single"] + counts["double"] + counts["triple"] + counts["home_run"],
            doubles=counts["double"],
            triples=counts["triple"],
            home_runs=counts["home_run"],
            rbi=counts["rbi"],
            runs=counts["run"],
            walks=counts["walk"],
            hit_by_pitch=counts["hit_by_pitch"],
            stolen_bases=counts["stolen_base"],
        )
        breakdowns[scenario] = score_batter(events, table)

    confidence = aggregate_confidence(batter_sample_confidence(stats, settings), resolved.adjustments, weights)
    logger.debug(
        "Projected batter %s: %.2f (%.2f-%.2f) confidence %.1f",
        context.player_id,
        breakdowns["expected"].total_points,
        breakdowns["floor"].total_points,
        breakdowns["ceiling"].total_points,
        confidence,
    )
    return Projection(
        kind="batter",
        context=context,
        site=table.site,
        expected=breakdowns["expected"],
        floor=breakdowns["floor"],
        ceiling=breakdowns["ceiling"],
        confidence=confidence,
        factors=list(resolved.adjustments),
        substituted_factors=list(resolved.substituted),
    )


def _pitcher_base_rates(stats: PitcherStats, settings: ProjectionSettings) -> Dict[str, float]:
    appearances = stats.games_started or stats.games_played
    if appearances > 0 and stats.outs > 0:
        outs_per_start = stats.outs / appearances
    else:
        outs_per_start = settings.default_outs_per_start
    shutout_rate = safe_div(stats.shutouts, appearances)
    return {
        "out": min(float(settings.max_outs), outs_per_start),
        "strikeout": safe_div(stats.strikeouts, stats.batters_faced),
        "win": safe_div(stats.wins, appearances),
        "earned_run": safe_div(stats.earned_runs, stats.outs),
        "hit_against": safe_div(stats.hits_allowed, stats.batters_faced),
        "walk_against": safe_div(stats.walks, stats.batters_faced),
        "hit_batsman": safe_div(stats.hit_batsmen, stats.batters_faced),
        "complete_game": safe_div(stats.complete_games, appearances),
        "complete_game_shutout": shutout_rate,
        "no_hitter": shutout_rate * settings.no_hitter_share,
    }


def build_pitcher_projection(
    context: PlayerContext,
    stats: PitcherStats,
    *,
    opponent: BatterStats | None = None,
    recent: PitcherStats | None = None,
    factors: Sequence[FactorAdjustment] = (),
    table: ScoringTable | None = None,
    settings: ProjectionSettings = DEFAULT_SETTINGS,
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
    baselines: LeagueBaselines = DEFAULT_BASELINES,
) -> Projection:
    """Project a starting pitcher.

    Expected outs come from outs per start, capped at a nine-inning game.
    Batters faced scale with expected outs using the pitcher's own batters
    faced per out (4.3 per inning without data). Win and complete-game
    bonuses are per-start probabilities and never exceed one.
    """

    table = table or get_table("DK")
    resolved = resolve_factors(
        _with_derived(
            factors,
            (opponent_adjustment(opponent, baselines), recent_form_adjustment(recent, stats)),
        )
    )

    rates = _adjust(_pitcher_base_rates(stats, settings), resolved.adjustments)
    expected_outs = min(float(settings.max_outs), rates["out"])
    if stats.outs > 0 and stats.batters_faced > 0:
        batters_faced_per_out = stats.batters_faced / stats.outs
    else:
        batters_faced_per_out = BATTERS_FACED_PER_INNING / 3
    batters_faced = expected_outs * batters_faced_per_out

    opportunities = {
        "out": 1.0,
        "strikeout": batters_faced,
        "win": 1.0,
        "earned_run": expected_outs,
        "hit_against": batters_faced,
        "walk_against": batters_faced,
        "hit_batsman": batters_faced,
        "complete_game": 1.0,
        "complete_game_shutout": 1.0,
        "no_hitter": 1.0,
    }

    breakdowns = {}
    for scenario in SCENARIOS:
        counts = _scenario_counts(scenario, rates, opportunities, table.pitcher, settings)
        events = PitcherEventCounts(
            outs=counts["out"],
            strikeouts=counts["strikeout"],
            wins=counts["win"],
            earned_runs=counts["earned_run"],
            hits_allowed=counts["hit_against"],
            walks_allowed=counts["walk_against"],
            hit_batsmen=counts["hit_batsman"],
            complete_games=counts["complete_game"],
            complete_game_shutouts=counts["complete_game_shutout"],
            no_hitters=counts["no_hitter"],
        )
        breakdowns[scenario] = score_pitcher(events, table)

    confidence = aggregate_confidence(pitcher_sample_confidence(stats, settings), resolved.adjustments, weights)
    logger.debug(
        "Projected pitcher %s: %.2f (%.2f-%.2f) confidence %.1f",
        context.player_id,
        breakdowns["expected"].total_points,
        breakdowns["floor"].total_points,
        breakdowns["ceiling"].total_points,
        confidence,
    )
    return Projection(
        kind="pitcher",
        context=context,
        site=table.site,
        expected=breakdowns["expected"],
        floor=breakdowns["floor"],
        ceiling=breakdowns["ceiling"],
        confidence=confidence,
        factors=list(resolved.adjustments),
        substituted_factors=list(resolved.substituted),
    )


@dataclass(frozen=True)
class ProjectionRequest:
    """Everything needed to project one player for one game."""

    kind: Literal["batter", "pitcher"]
    context: PlayerContext
    stats: Union[BatterStats, PitcherStats]
    opponent: Union[BatterStats, PitcherStats, None] = None
    recent: Union[BatterStats, PitcherStats, None] = None
    factors: tuple[FactorAdjustment, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.kind not in ("batter", "pitcher"):
            raise ValueError(f"Unknown player kind {self.kind!r}")
        expected_type = BatterStats if self.kind == "batter" else PitcherStats
        if not isinstance(self.stats, expected_type):
            raise TypeError(f"{self.kind} request requires {expected_type.__name__}")
        object.__setattr__(self, "factors", tuple(self.factors))


def project_request(
    request: ProjectionRequest,
    table: ScoringTable | None = None,
    settings: ProjectionSettings = DEFAULT_SETTINGS,
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
) -> Projection:
    """Pure per-player projection, safe to run in worker processes."""

    if request.kind == "batter":
        opponent = request.opponent if isinstance(request.opponent, PitcherStats) else None
        recent = request.recent if isinstance(request.recent, BatterStats) else None
        return build_batter_projection(
            request.context,
            request.stats,
            opponent=opponent,
            recent=recent,
            factors=request.factors,
            table=table,
            settings=settings,
            weights=weights,
        )
    opponent = request.opponent if isinstance(request.opponent, BatterStats) else None
    recent = request.recent if isinstance(request.recent, PitcherStats) else None
    return build_pitcher_projection(
        request.context,
        request.stats,
        opponent=opponent,
        recent=recent,
        factors=request.factors,
        table=table,
        settings=settings,
        weights=weights,
    )
