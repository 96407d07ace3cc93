import csv
import io

import pytest

from mlbdfs.models import BatterPointsBreakdown, FactorKind, PlayerContext, Projection
from mlbdfs.slate import FilterCriteria, export_projections_to_csv, filter_projections
from mlbdfs.slate.export import EXPORT_HEADERS


def _projection(
    player_id: str,
    expected: float,
    *,
    team: str = "NYY",
    confidence: float = 60.0,
    salary: int | None = 5000,
    kind: str = "batter",
) -> Projection:
    return Projection(
        kind=kind,
        context=PlayerContext(player_id=player_id, name=f"Player {player_id}", team=team, salary=salary),
        site="DK",
        expected=BatterPointsBreakdown(total_points=expected),
        floor=BatterPointsBreakdown(total_points=expected * 0.5),
        ceiling=BatterPointsBreakdown(total_points=expected * 1.6),
        confidence=confidence,
        substituted_factors=[FactorKind.MATCHUP, FactorKind.RECENT_FORM],
    )


def _pool():
    return [
        _projection("a", 20.0, team="NYY", confidence=80, salary=6000),
        _projection("b", 10.0, team="BOS", confidence=40, salary=2500),
        _projection("c", 6.0, team="NYY", confidence=70, salary=None),
        _projection("d", 4.0, team="TB", confidence=20, salary=4000, kind="pitcher"),
    ]


def test_filter_ranks_by_expected():
    result = filter_projections(_pool(), FilterCriteria())

    assert [item.projection.context.player_id for item in result.projections] == ["a", "b", "c", "d"]
    assert [item.rank for item in result.projections] == [1, 2, 3, 4]
    assert result.summary.selected == 4
    assert result.summary.expected_mean == pytest.approx(10.0)
    assert result.summary.expected_median == pytest.approx(8.0)


def test_tiers_relative_to_pool_mean():
    result = filter_projections(_pool(), FilterCriteria(limit=3))

    assert [item.tier for item in result.projections] == ["top", "mid", "low"]
    assert result.pool_summary.top_tier_threshold == pytest.approx(12.5)
    assert result.pool_summary.mid_tier_threshold == pytest.approx(9.0)
    assert result.summary.available == 4
    assert result.summary.selected == 3


def test_tiers_stay_ordered_for_negative_pool():
    pool = [_projection("a", -2.0), _projection("b", -4.0), _projection("c", -6.0)]

    result = filter_projections(pool, FilterCriteria())

    assert result.pool_summary.top_tier_threshold == pytest.approx(-3.0)
    assert result.pool_summary.mid_tier_threshold == pytest.approx(-4.4)
    assert [item.tier for item in result.projections] == ["top", "mid", "low"]


def test_filter_by_kind_confidence_and_team():
    pool = _pool()

    pitchers = filter_projections(pool, FilterCriteria(kind="pitcher"))
    assert [p.projection.context.player_id for p in pitchers.projections] == ["d"]
    confident = filter_projections(pool, FilterCriteria(min_confidence=50))
    assert [p.projection.context.player_id for p in confident.projections] == ["a", "c"]
    yankees = filter_projections(pool, FilterCriteria(include_teams=("nyy",), exclude_player_ids=("c",)))
    assert [p.projection.context.player_id for p in yankees.projections] == ["a"]
    no_sox = filter_projections(pool, FilterCriteria(exclude_teams=("BOS",), max_expected=15))
    assert [p.projection.context.player_id for p in no_sox.projections] == ["c", "d"]


def test_sort_by_value_drops_missing_salary_to_bottom():
    result = filter_projections(_pool(), FilterCriteria(sort_by="value"))

    assert [item.projection.context.player_id for item in result.projections] == ["b", "a", "d", "c"]


def test_min_value_excludes_unpriced():
    result = filter_projections(_pool(), FilterCriteria(min_value=2.0))

    assert [item.projection.context.player_id for item in result.projections] == ["a", "b"]
    assert result.summary.value_mean == pytest.approx((20 / 6 + 4) / 2)


def test_ascending_sort():
    result = filter_projections(_pool(), FilterCriteria(sort_by="confidence", sort_direction="asc"))

    assert [item.projection.context.player_id for item in result.projections] == ["d", "b", "c", "a"]


def test_empty_pool_summary():
    result = filter_projections([], FilterCriteria())

    assert result.projections == []
    assert result.summary.expected_mean is None
    assert result.pool_summary.top_tier_threshold is None


def test_export_projections_to_csv():
    content = export_projections_to_csv(_pool()[:3])
    rows = list(csv.reader(io.StringIO(content)))

    assert tuple(rows[0]) == EXPORT_HEADERS
    assert len(rows) == 4
    first = dict(zip(rows[0], rows[1]))
    assert first["player_id"] == "a"
    assert first["expected"] == "20.00"
    assert first["floor"] == "10.00"
    assert first["value"] == "3.33"
    assert first["substituted_factors"] == "matchup|recent_form"
    unpriced = dict(zip(rows[0], rows[3]))
    assert unpriced["salary"] == ""
    assert unpriced["value"] == ""
