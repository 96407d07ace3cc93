"""Reference factor providers.

Each provider turns already-fetched environment or matchup data into a
``FactorAdjustment``. Providers return ``None`` when they have nothing to
say; the projection builder substitutes a neutral adjustment for those.
Multiplier adjustments here always carry a full ``by_category`` map so
categories a factor does not touch stay at 1.0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional

from mlbdfs.config.scoring import BATTER_CATEGORIES, PITCHER_CATEGORIES
from mlbdfs.config.settings import DEFAULT_BASELINES, LeagueBaselines
from mlbdfs.models.factors import FactorAdjustment, FactorKind
from mlbdfs.models.stats import BatterStats, PitcherStats
from mlbdfs.numeric import clamp, safe_div


BALLPARK_CONFIDENCE = 80.0
WEATHER_CONFIDENCE = 70.0
PLATOON_HEURISTIC_CONFIDENCE = 30.0
PLATOON_HEURISTIC_EDGE = 0.10
PLATOON_FULL_SAMPLE_PA = 300.0

WEATHER_BASE_TEMPERATURE = 70.0
WEATHER_MIN_WIND = 5.0
WEATHER_RANGE = (0.7, 1.3)
RATIO_RANGE = (0.5, 1.5)

MATCHUP_FULL_SAMPLE_PA = 100.0
OPPONENT_FULL_SAMPLE_PA = 600.0
OPPONENT_FULL_SAMPLE_BF = 400.0
RECENT_FORM_PRIOR_PA = 100.0
RECENT_FORM_PRIOR_BF = 100.0

_DOME_MARKERS = ("dome", "roof closed", "indoor")

_BATTER_PER_PA_FIELDS: Dict[str, str] = {
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

_PITCHER_PER_BF_FIELDS: Dict[str, str] = {
    "strikeout": "strikeouts",
    "hit_against": "hits_allowed",
    "walk_against": "walks",
    "hit_batsman": "hit_batsmen",
}


def _category_map(default: float = 1.0, **overrides: float) -> Dict[str, float]:
    values = {category: default for category in (*BATTER_CATEGORIES, *PITCHER_CATEGORIES)}
    values.update(overrides)
    return values


def _ratio(value: float, baseline: float) -> float:
    if baseline <= 0 or value <= 0:
        return 1.0
    return clamp(value / baseline, *RATIO_RANGE)


def _regress(ratio: float, weight: float) -> float:
    return 1.0 + (ratio - 1.0) * clamp(weight, 0.0, 1.0)


def _partial(factor: float, share: float) -> float:
    return 1.0 + (factor - 1.0) * share


@dataclass(frozen=True)
class BallparkFactors:
    """Park factors by hit type; 1.0 is neutral."""

    overall: float = 1.0
    singles: float = 1.0
    doubles: float = 1.0
    triples: float = 1.0
    home_runs: float = 1.0
    runs: float = 1.0
    left_handed: float = 1.0
    right_handed: float = 1.0


def ballpark_adjustment(
    park: BallparkFactors | None,
    *,
    batter_hand: Optional[str] = None,
    confidence: float = BALLPARK_CONFIDENCE,
) -> FactorAdjustment | None:
    if park is None:
        return None

    if batter_hand == "L":
        hand = park.left_handed
    elif batter_hand == "R":
        hand = park.right_handed
    elif batter_hand == "S":
        hand = (park.left_handed + park.right_handed) / 2
    else:
        hand = 1.0

    hits_factor = (park.singles + park.doubles + park.triples + park.home_runs) / 4
    by_category = _category_map(
        single=park.singles * hand,
        double=park.doubles * hand,
        triple=park.triples * hand,
        home_run=park.home_runs * hand,
        run=park.runs,
        rbi=park.runs,
        hit_against=hits_factor,
        earned_run=park.runs,
    )
    return FactorAdjustment(
        kind=FactorKind.BALLPARK,
        value=park.overall,
        confidence_contribution=clamp(confidence, 0.0, 100.0),
        by_category=by_category,
        note=f"park overall {park.overall:.2f}",
    )


def is_dome(condition: Optional[str]) -> bool:
    if not condition:
        return False
    lowered = condition.lower()
    return any(marker in lowered for marker in _DOME_MARKERS)


def weather_factor(temperature_f: float, wind_speed_mph: float = 0.0, wind_direction: str = "") -> float:
    """Home-run weather multiplier.

    About 1% per 10°F away from 70°F, wind blowing out adds ``speed/20``,
    blowing in removes ``speed/25`` once it reaches 5 mph. Clamped to
    [0.7, 1.3].
    """

    temperature = 1.0 + (temperature_f - WEATHER_BASE_TEMPERATURE) / 10 * 0.01
    wind = 1.0
    if wind_speed_mph >= WEATHER_MIN_WIND:
        direction = (wind_direction or "").lower()
        words = set(direction.replace("-", " ").split())
        if "cross" in direction:
            wind = 1.0
        elif "out" in words or "to center" in direction:
            wind = 1.0 + wind_speed_mph / 20
        elif "in" in words or "from center" in direction:
            wind = 1.0 - wind_speed_mph / 25
    return clamp(temperature * wind, *WEATHER_RANGE)


def weather_adjustment(
    temperature_f: Optional[float],
    wind_speed_mph: float = 0.0,
    wind_direction: str = "",
    *,
    condition: Optional[str] = None,
    dome: bool = False,
    confidence: float = WEATHER_CONFIDENCE,
) -> FactorAdjustment | None:
    """Weather multiplier; domes and closed roofs are neutral with zero confidence."""

    if dome or is_dome(condition):
        return FactorAdjustment.neutral(FactorKind.WEATHER, note="dome")
    if temperature_f is None:
        return None

    factor = weather_factor(temperature_f, wind_speed_mph, wind_direction)
    by_category = _category_map(
        home_run=factor,
        double=_partial(factor, 0.5),
        triple=_partial(factor, 0.5),
        run=_partial(factor, 0.5),
        rbi=_partial(factor, 0.5),
        hit_against=_partial(factor, 0.25),
        earned_run=_partial(factor, 0.5),
    )
    return FactorAdjustment(
        kind=FactorKind.WEATHER,
        value=factor,
        confidence_contribution=clamp(confidence, 0.0, 100.0),
        by_category=by_category,
        note=f"{temperature_f:.0f}F wind {wind_speed_mph:.0f} {wind_direction}".strip(),
    )


def platoon_adjustment(
    batter_hand: Optional[str],
    pitcher_hand: Optional[str],
    *,
    split_ops: Optional[float] = None,
    overall_ops: Optional[float] = None,
    split_plate_appearances: float = 0.0,
) -> FactorAdjustment | None:
    """Handedness edge for a batter.

    Uses the batter's split OPS against this pitcher hand when available,
    regressed by sample; otherwise opposite hands get +10% and same hands
    -10%.
    """

    if batter_hand is None or pitcher_hand is None:
        return None

    if split_ops and overall_ops and split_plate_appearances > 0:
        weight = min(1.0, math.sqrt(split_plate_appearances / PLATOON_FULL_SAMPLE_PA))
        value = _regress(_ratio(split_ops, overall_ops), weight)
        confidence = weight * 100
        note = f"split OPS {split_ops:.3f} over {split_plate_appearances:.0f} PA"
    elif batter_hand == "S":
        value = 1.0 + PLATOON_HEURISTIC_EDGE / 2
        confidence = PLATOON_HEURISTIC_CONFIDENCE
        note = "switch hitter"
    else:
        edge = PLATOON_HEURISTIC_EDGE if batter_hand != pitcher_hand else -PLATOON_HEURISTIC_EDGE
        value = 1.0 + edge
        confidence = PLATOON_HEURISTIC_CONFIDENCE
        note = f"{batter_hand} vs {pitcher_hand}"

    by_category = _category_map(
        single=value,
        double=value,
        triple=value,
        home_run=value,
        rbi=value,
        run=value,
        walk=value,
    )
    return FactorAdjustment(
        kind=FactorKind.PLATOON,
        value=value,
        confidence_contribution=confidence,
        by_category=by_category,
        note=note,
    )


def matchup_confidence(plate_appearances: float) -> float:
    """``min(1, sqrt(PA / 100))``; zero without history."""

    if plate_appearances <= 0:
        return 0.0
    return min(1.0, math.sqrt(plate_appearances / MATCHUP_FULL_SAMPLE_PA))


def matchup_adjustment(
    history: BatterStats | None,
    baselines: LeagueBaselines = DEFAULT_BASELINES,
) -> FactorAdjustment | None:
    """Batter-vs-pitcher history regressed toward league averages."""

    if history is None or history.plate_appearances <= 0:
        return None

    weight = matchup_confidence(history.plate_appearances)
    avg = weight * history.avg + (1 - weight) * baselines.avg
    obp = weight * history.obp + (1 - weight) * baselines.obp
    slg = weight * history.slg + (1 - weight) * baselines.slg

    contact = _ratio(avg, baselines.avg)
    discipline = _ratio(obp, baselines.obp)
    power = _ratio(slg, baselines.slg)
    overall = _ratio(obp + slg, baselines.obp + baselines.slg)
    by_category = _category_map(
        single=contact,
        double=power,
        triple=power,
        home_run=power,
        walk=discipline,
        run=overall,
        rbi=overall,
        hit_against=contact,
        walk_against=discipline,
        earned_run=overall,
    )
    return FactorAdjustment(
        kind=FactorKind.MATCHUP,
        value=overall,
        confidence_contribution=weight * 100,
        by_category=by_category,
        note=f"{history.plate_appearances} PA head to head",
    )


def opponent_adjustment(
    opponent: BatterStats | PitcherStats | None,
    baselines: LeagueBaselines = DEFAULT_BASELINES,
    *,
    estimated_penalty: float = 0.9,
) -> FactorAdjustment | None:
    """Opposing side's quality relative to league, regressed by its sample.

    A ``PitcherStats`` opponent adjusts a batter projection; a ``BatterStats``
    opponent (typically the opposing lineup's combined line) adjusts a
    pitcher projection.
    """

    if isinstance(opponent, PitcherStats):
        if opponent.batters_faced <= 0:
            return None
        weight = min(1.0, opponent.batters_faced / OPPONENT_FULL_SAMPLE_BF)
        hits = _regress(_ratio(safe_div(opponent.hits_allowed, opponent.batters_faced), baselines.pitcher_hit_rate), weight)
        power = _regress(
            _ratio(safe_div(opponent.home_runs_allowed, opponent.batters_faced), baselines.pitcher_hr_rate), weight
        )
        walks = _regress(_ratio(opponent.bb_rate, baselines.pitcher_bb_rate), weight)
        runs = _regress(_ratio(opponent.era, baselines.era), weight)
        value = _regress(_ratio(opponent.whip, baselines.whip), weight)
        by_category = _category_map(
            single=hits,
            double=hits,
            triple=hits,
            home_run=power,
            walk=walks,
            run=runs,
            rbi=runs,
        )
        confidence = weight * 100
        if opponent.batters_faced_estimated:
            confidence *= estimated_penalty
        note = f"opposing pitcher {opponent.batters_faced:.0f} BF"
    elif isinstance(opponent, BatterStats):
        if opponent.plate_appearances <= 0:
            return None
        weight = min(1.0, opponent.plate_appearances / OPPONENT_FULL_SAMPLE_PA)
        strikeouts = _regress(_ratio(opponent.k_rate, baselines.batter_k_rate), weight)
        walks = _regress(_ratio(opponent.bb_rate, baselines.batter_bb_rate), weight)
        hits = _regress(_ratio(opponent.avg, baselines.avg), weight)
        value = _regress(_ratio(opponent.ops, baselines.ops), weight)
        by_category = _category_map(
            strikeout=strikeouts,
            walk_against=walks,
            hit_against=hits,
            earned_run=value,
            win=_regress(_ratio(baselines.ops, opponent.ops), weight),
        )
        confidence = weight * 100
        note = f"opposing lineup {opponent.plate_appearances} PA"
    else:
        return None

    return FactorAdjustment(
        kind=FactorKind.OPPONENT,
        value=value,
        confidence_contribution=confidence,
        by_category=by_category,
        note=note,
    )


def recent_form_adjustment(
    recent: BatterStats | PitcherStats | None,
    baseline: BatterStats | PitcherStats | None,
) -> FactorAdjustment | None:
    """Additive per-opportunity deltas of recent over baseline rates.

    Deltas are weighted by ``n / (n + 100)`` where ``n`` is the recent plate
    appearances (batters) or batters faced (pitchers).
    """

    if recent is None or baseline is None:
        return None

    if isinstance(recent, BatterStats) and isinstance(baseline, BatterStats):
        sample = float(recent.plate_appearances)
        if sample <= 0 or baseline.plate_appearances <= 0:
            return None
        weight = sample / (sample + RECENT_FORM_PRIOR_PA)
        deltas = {
            category: weight
            * (
                safe_div(getattr(recent, name), recent.plate_appearances)
                - safe_div(getattr(baseline, name), baseline.plate_appearances)
            )
            for category, name in _BATTER_PER_PA_FIELDS.items()
        }
        note = f"last {recent.plate_appearances} PA"
    elif isinstance(recent, PitcherStats) and isinstance(baseline, PitcherStats):
        sample = recent.batters_faced
        if sample <= 0 or baseline.batters_faced <= 0:
            return None
        weight = sample / (sample + RECENT_FORM_PRIOR_BF)
        deltas = {
            category: weight
            * (
                safe_div(getattr(recent, name), recent.batters_faced)
                - safe_div(getattr(baseline, name), baseline.batters_faced)
            )
            for category, name in _PITCHER_PER_BF_FIELDS.items()
        }
        deltas["earned_run"] = weight * (
            safe_div(recent.earned_runs, recent.outs) - safe_div(baseline.earned_runs, baseline.outs)
        )
        note = f"last {recent.batters_faced:.0f} BF"
    else:
        return None

    return FactorAdjustment(
        kind=FactorKind.RECENT_FORM,
        value=0.0,
        confidence_contribution=weight * 100,
        by_category=_category_map(0.0, **deltas),
        note=note,
    )
