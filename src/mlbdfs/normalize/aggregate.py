"""Counts-first aggregation of season lines into career lines."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Sequence, TypeVar

from mlbdfs.models.raw import RawSeasonStat
from mlbdfs.models.stats import (
    BATTER_COUNT_FIELDS,
    PITCHER_COUNT_FIELDS,
    BatterStats,
    CareerProfile,
    PitcherStats,
)

from .stats import normalize_batter_stats, normalize_pitcher_stats


logger = logging.getLogger(__name__)

_UNKNOWN_SEASON = "unknown"

StatsT = TypeVar("StatsT", BatterStats, PitcherStats)


def aggregate_batter_stats(seasons: Iterable[BatterStats]) -> BatterStats:
    """Sum counting fields across seasons and re-derive every rate."""

    totals = {name: 0 for name in BATTER_COUNT_FIELDS}
    for season in seasons:
        for name in BATTER_COUNT_FIELDS:
            totals[name] += getattr(season, name)
    return BatterStats.from_counts(**totals)


def aggregate_pitcher_stats(seasons: Iterable[PitcherStats]) -> PitcherStats:
    """Sum counting fields (outs, never decimal innings) and re-derive rates."""

    totals: Dict[str, Any] = {name: 0 for name in PITCHER_COUNT_FIELDS}
    totals["batters_faced"] = 0.0
    estimated = False
    for season in seasons:
        for name in PITCHER_COUNT_FIELDS:
            totals[name] += getattr(season, name)
        estimated = estimated or season.batters_faced_estimated
    return PitcherStats.from_counts(batters_faced_estimated=estimated, **totals)


def _season_key(season: str | None) -> tuple[int, str]:
    if season is None:
        return (1, _UNKNOWN_SEASON)
    return (0, season)


def _build_career(
    kind: str,
    splits: Sequence[Any],
    normalize: Callable[[RawSeasonStat], StatsT],
    aggregate: Callable[[Iterable[StatsT]], StatsT],
) -> CareerProfile:
    grouped: Dict[str, List[StatsT]] = defaultdict(list)
    order: Dict[str, tuple[int, str]] = {}
    for split in splits:
        record = RawSeasonStat.from_payload(split)
        key = record.season or _UNKNOWN_SEASON
        order.setdefault(key, _season_key(record.season))
        grouped[key].append(normalize(record))

    seasons: Dict[str, StatsT] = {}
    for key in sorted(grouped, key=lambda item: order[item]):
        lines = grouped[key]
        if len(lines) > 1:
            logger.debug("Merging %s %s splits for season %s", len(lines), kind, key)
        seasons[key] = aggregate(lines)

    return CareerProfile(kind=kind, seasons=seasons, career=aggregate(seasons.values()))


def build_batter_career(splits: Sequence[Any]) -> CareerProfile:
    """Normalize raw season splits and roll them into a batter career profile.

    Splits sharing a season (one per team after a trade) are merged first.
    """

    return _build_career("batter", splits, normalize_batter_stats, aggregate_batter_stats)


def build_pitcher_career(splits: Sequence[Any]) -> CareerProfile:
    return _build_career("pitcher", splits, normalize_pitcher_stats, aggregate_pitcher_stats)
