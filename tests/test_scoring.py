import pytest

from mlbdfs.config import BATTER_CATEGORIES, PITCHER_CATEGORIES, get_table
from mlbdfs.scoring import BatterEventCounts, PitcherEventCounts, score_batter, score_pitcher


def _sample_batter_line() -> BatterEventCounts:
    # Three singles, a double and a home run.
    return BatterEventCounts(
        hits=5,
        doubles=1,
        home_runs=1,
        rbi=2,
        runs=1,
        walks=1,
        stolen_bases=1,
    )


def test_score_batter_draftkings_line():
    breakdown = score_batter(_sample_batter_line(), get_table("DK"))

    assert breakdown.singles == 3
    assert breakdown.points["single"] == pytest.approx(9.0)
    assert breakdown.points["double"] == pytest.approx(5.0)
    assert breakdown.points["home_run"] == pytest.approx(10.0)
    assert breakdown.points["rbi"] == pytest.approx(4.0)
    assert breakdown.total_points == pytest.approx(37.0)


def test_score_batter_fanduel_line():
    breakdown = score_batter(_sample_batter_line(), get_table("FD"))

    assert breakdown.total_points == pytest.approx(9 + 6 + 12 + 7 + 3.2 + 3 + 6)


def test_total_points_is_sum_of_categories():
    counts = BatterEventCounts(hits=1.3, doubles=0.25, triples=0.02, home_runs=0.2, rbi=0.7, runs=0.75, walks=0.4)
    breakdown = score_batter(counts, get_table("DK"))

    assert set(breakdown.points) == set(BATTER_CATEGORIES)
    assert breakdown.total_points == pytest.approx(sum(breakdown.points.values()))


def test_negative_singles_are_clamped():
    breakdown = score_batter(BatterEventCounts(hits=1, home_runs=2), get_table("DK"))

    assert breakdown.singles == 0
    assert breakdown.points["single"] == 0
    assert breakdown.total_points == pytest.approx(20.0)


def test_score_pitcher_complete_game_shutout_stacks():
    counts = PitcherEventCounts.for_game(
        outs=27,
        strikeouts=10,
        win=True,
        earned_runs=0,
        hits_allowed=3,
        walks_allowed=1,
        complete_game=True,
    )
    breakdown = score_pitcher(counts, get_table("DK"))

    assert breakdown.complete_games == 1
    assert breakdown.complete_game_shutouts == 1
    assert breakdown.no_hitters == 0
    assert breakdown.innings == pytest.approx(9.0)
    assert breakdown.total_points == pytest.approx(20.25 + 20 + 4 - 1.8 - 0.6 + 2.5 + 2.5)


def test_score_pitcher_no_hitter_earns_every_bonus():
    counts = PitcherEventCounts.for_game(
        outs=27,
        strikeouts=8,
        win=True,
        hits_allowed=0,
        walks_allowed=2,
        complete_game=True,
    )
    breakdown = score_pitcher(counts, get_table("DK"))

    assert breakdown.points["no_hitter"] == pytest.approx(5.0)
    assert breakdown.total_points == pytest.approx(49.05)


def test_score_pitcher_without_complete_game_has_no_bonus():
    counts = PitcherEventCounts.for_game(outs=21, strikeouts=7, earned_runs=0, hits_allowed=0)
    breakdown = score_pitcher(counts, get_table("DK"))

    assert set(breakdown.points) == set(PITCHER_CATEGORIES)
    assert breakdown.points["complete_game"] == 0
    assert breakdown.points["complete_game_shutout"] == 0
    assert breakdown.points["no_hitter"] == 0
    assert breakdown.total_points == pytest.approx(21 * 0.75 + 14)


def test_score_pitcher_earned_runs_cost_points():
    counts = PitcherEventCounts.for_game(outs=15, strikeouts=4, earned_runs=5, hits_allowed=8, walks_allowed=3)

    dk = score_pitcher(counts, get_table("DK"))
    fd = score_pitcher(counts, get_table("FD"))

    assert dk.total_points == pytest.approx(11.25 + 8 - 10 - 4.8 - 1.8)
    assert fd.total_points == pytest.approx(15 + 12 - 15)
