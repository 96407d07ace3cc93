"""Helpers for slicing and ranking projection pools."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean, median, pstdev
from typing import Iterable, Literal, Sequence

from mlbdfs.models.projection import Projection


TOP_TIER_MULTIPLIER = 1.25
MID_TIER_MULTIPLIER = 0.9


@dataclass(frozen=True)
class FilterCriteria:
    """Filtering configuration for projection pools."""

    kind: Literal["batter", "pitcher"] | None = None
    min_confidence: float | None = None
    max_confidence: float | None = None
    min_expected: float | None = None
    max_expected: float | None = None
    min_value: float | None = None
    include_teams: tuple[str, ...] = ()
    exclude_teams: tuple[str, ...] = ()
    exclude_player_ids: tuple[str, ...] = ()
    limit: int | None = None
    sort_by: Literal["expected", "floor", "ceiling", "confidence", "value"] = "expected"
    sort_direction: Literal["asc", "desc"] = "desc"


@dataclass(frozen=True)
class RankedProjection:
    """Projection returned from a filter operation."""

    projection: Projection
    rank: int
    tier: Literal["top", "mid", "low"]


@dataclass(frozen=True)
class FilterSummary:
    """Aggregate stats for a projection selection."""

    available: int
    selected: int
    expected_mean: float | None
    expected_median: float | None
    expected_std: float | None
    confidence_mean: float | None
    value_mean: float | None
    top_tier_threshold: float | None
    mid_tier_threshold: float | None


@dataclass(frozen=True)
class FilterResult:
    """Container for ranked projections and summary statistics."""

    projections: list[RankedProjection]
    summary: FilterSummary
    pool_summary: FilterSummary


def _passes_criteria(projection: Projection, criteria: FilterCriteria) -> bool:
    if criteria.kind is not None and projection.kind != criteria.kind:
        return False
    if criteria.min_confidence is not None and projection.confidence < criteria.min_confidence:
        return False
    if criteria.max_confidence is not None and projection.confidence > criteria.max_confidence:
        return False
    if criteria.min_expected is not None and projection.expected_points < criteria.min_expected:
        return False
    if criteria.max_expected is not None and projection.expected_points > criteria.max_expected:
        return False
    if criteria.min_value is not None:
        value = projection.value
        if value is None or value < criteria.min_value:
            return False

    team = (projection.context.team or "").upper()
    if criteria.include_teams and team not in {code.upper() for code in criteria.include_teams}:
        return False
    if criteria.exclude_teams and team in {code.upper() for code in criteria.exclude_teams}:
        return False
    if projection.context.player_id in criteria.exclude_player_ids:
        return False

    return True


def _sort_key(projection: Projection, criteria: FilterCriteria) -> float:
    if criteria.sort_by == "floor":
        return projection.floor_points
    if criteria.sort_by == "ceiling":
        return projection.ceiling_points
    if criteria.sort_by == "confidence":
        return projection.confidence
    if criteria.sort_by == "value":
        return projection.value if projection.value is not None else float("-inf")
    return projection.expected_points


def _safe_stats(values: Iterable[float]) -> tuple[float | None, float | None, float | None]:
    values = list(values)
    if not values:
        return None, None, None
    mean = fmean(values)
    med = median(values)
    std = pstdev(values) if len(values) > 1 else 0.0
    return mean, med, std


def _tier_thresholds(mean: float | None) -> tuple[float | None, float | None]:
    # Offsets scale with abs(mean); the top cut never falls below the mid cut.
    if mean is None:
        return None, None
    spread = abs(mean)
    return mean + spread * (TOP_TIER_MULTIPLIER - 1.0), mean - spread * (1.0 - MID_TIER_MULTIPLIER)


def _build_summary(*, available: Sequence[Projection], selected: Sequence[Projection]) -> FilterSummary:
    expected_mean, expected_median, expected_std = _safe_stats(p.expected_points for p in selected)
    confidence_mean, _, _ = _safe_stats(p.confidence for p in selected)
    value_mean, _, _ = _safe_stats(p.value for p in selected if p.value is not None)
    top_threshold, mid_threshold = _tier_thresholds(expected_mean)

    return FilterSummary(
        available=len(available),
        selected=len(selected),
        expected_mean=expected_mean,
        expected_median=expected_median,
        expected_std=expected_std,
        confidence_mean=confidence_mean,
        value_mean=value_mean,
        top_tier_threshold=top_threshold,
        mid_tier_threshold=mid_threshold,
    )


def _tier(points: float, summary: FilterSummary) -> Literal["top", "mid", "low"]:
    if summary.top_tier_threshold is not None and points >= summary.top_tier_threshold:
        return "top"
    if summary.mid_tier_threshold is not None and points >= summary.mid_tier_threshold:
        return "mid"
    return "low"


def filter_projections(
    projections: Sequence[Projection],
    criteria: FilterCriteria,
) -> FilterResult:
    """Filter projections and return ranked selections with summary statistics.

    Tiers are relative to the mean expected points of the whole pool.
    """

    pool = list(projections)
    filtered = [projection for projection in pool if _passes_criteria(projection, criteria)]

    reverse = criteria.sort_direction != "asc"
    filtered.sort(key=lambda p: (_sort_key(p, criteria), p.context.player_id), reverse=reverse)

    limit = criteria.limit if criteria.limit is not None and criteria.limit > 0 else None
    selected = filtered[:limit] if limit is not None else filtered

    pool_summary = _build_summary(available=pool, selected=pool)
    ranked = [
        RankedProjection(projection=projection, rank=index, tier=_tier(projection.expected_points, pool_summary))
        for index, projection in enumerate(selected, start=1)
    ]

    return FilterResult(
        projections=ranked,
        summary=_build_summary(available=filtered, selected=selected),
        pool_summary=pool_summary,
    )


__all__ = [
    "FilterCriteria",
    "FilterResult",
    "FilterSummary",
    "RankedProjection",
    "filter_projections",
]
