import pytest

from mlbdfs.models import BatterStats, PitcherStats
from mlbdfs.normalize import (
    aggregate_batter_stats,
    aggregate_pitcher_stats,
    build_batter_career,
    build_pitcher_career,
    normalize_pitcher_stats,
)


def test_aggregate_batter_weights_by_counts_not_rates():
    short = BatterStats.from_counts(at_bats=10, plate_appearances=10, hits=4)
    full = BatterStats.from_counts(at_bats=500, plate_appearances=500, hits=100)

    career = aggregate_batter_stats([short, full])

    assert career.at_bats == 510
    assert career.hits == 104
    assert career.avg == pytest.approx(104 / 510)
    assert career.avg == pytest.approx(0.2039, abs=1e-4)


def test_aggregate_batter_empty_is_all_zero():
    career = aggregate_batter_stats([])

    assert career == BatterStats.empty()
    assert career.avg == 0.0
    assert career.ops == 0.0


def test_aggregate_pitcher_sums_outs():
    first = normalize_pitcher_stats({"IP": "6.1", "ER": 2, "BF": 25})
    second = normalize_pitcher_stats({"IP": "5.2", "ER": 1, "BF": 22})

    total = aggregate_pitcher_stats([first, second])

    assert total.outs == 36
    assert total.innings_decimal == pytest.approx(12.0)
    assert total.innings_pitched == pytest.approx(12.0)
    assert total.era == pytest.approx(9 * 3 / 12)
    assert total.batters_faced == pytest.approx(47)


def test_aggregate_pitcher_carries_estimated_flag():
    reported = normalize_pitcher_stats({"IP": "50", "BF": 210})
    estimated = normalize_pitcher_stats({"IP": "50"})

    assert aggregate_pitcher_stats([reported]).batters_faced_estimated is False
    assert aggregate_pitcher_stats([reported, estimated]).batters_faced_estimated is True


def test_aggregate_pitcher_empty_is_all_zero():
    total = aggregate_pitcher_stats([])

    assert total == PitcherStats.empty()
    assert total.whip == 0.0


def test_build_batter_career_merges_traded_seasons():
    splits = [
        {"season": "2023", "team": "NYM", "stat": {"atBats": 200, "hits": 50, "homeRuns": 10}},
        {"season": "2022", "team": "NYM", "stat": {"atBats": 500, "hits": 140, "homeRuns": 25}},
        {"season": "2023", "team": "SD", "stat": {"atBats": 300, "hits": 90, "homeRuns": 12}},
        {"stat": {"atBats": 20, "hits": 5}},
    ]

    profile = build_batter_career(splits)

    assert profile.kind == "batter"
    assert list(profile.seasons) == ["2022", "2023", "unknown"]
    assert profile.season_count == 3
    assert profile.seasons["2023"].at_bats == 500
    assert profile.seasons["2023"].home_runs == 22
    assert profile.career.at_bats == 1020
    assert profile.career.hits == 285
    assert profile.career.avg == pytest.approx(285 / 1020)
    assert profile.latest_season() == profile.seasons["unknown"]


def test_build_pitcher_career_ignores_non_mapping_splits():
    profile = build_pitcher_career(
        [
            {"season": "2021", "stat": {"inningsPitched": "100.1", "earnedRuns": 40}},
            "garbage",
            {"season": "2022", "stat": {"inningsPitched": "80.2", "earnedRuns": 30}},
        ]
    )

    assert list(profile.seasons)[:2] == ["2021", "2022"]
    assert profile.career.outs == 301 + 242
    assert profile.career.earned_runs == 70


def test_build_career_with_no_splits():
    profile = build_batter_career([])

    assert profile.season_count == 0
    assert profile.latest_season() is None
    assert profile.career.plate_appearances == 0
