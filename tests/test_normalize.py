import json
import math

import pytest

from mlbdfs.models import RawSeasonStat
from mlbdfs.normalize import (
    BATTERS_FACED_PER_INNING,
    MAX_COUNT,
    innings_to_decimal,
    normalize_batter_stats,
    normalize_pitcher_stats,
    parse_count,
    parse_innings,
    parse_number,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (".301", 0.301),
        ("1,234", 1234.0),
        (12, 12.0),
        ("-.--", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (10**400, 0.0),
        ("1" + "0" * 400, 0.0),
    ],
)
def test_parse_number_defaults_to_zero(raw, expected):
    assert parse_number(raw) == pytest.approx(expected)


def test_parse_count_rounds_and_floors_at_zero():
    assert parse_count("12.6") == 13
    assert parse_count("-4") == 0


@pytest.mark.parametrize(
    "raw, outs",
    [
        ("183.2", 551),
        ("183.1", 550),
        ("183.0", 549),
        ("183", 549),
        (183.2, 551),
        (6.1, 19),
        ("0", 0),
        ("0.2", 2),
        (None, 0),
        ("-.--", 0),
    ],
)
def test_parse_innings_reads_box_score_notation(raw, outs):
    assert parse_innings(raw) == outs


def test_parse_innings_ignores_malformed_fraction():
    assert parse_innings("5.3") == 15
    assert parse_innings("5.7") == 15


def test_innings_to_decimal_uses_thirds():
    assert innings_to_decimal("183.2") == pytest.approx(183 + 2 / 3)
    assert innings_to_decimal("10.1") == pytest.approx(10 + 1 / 3)


def test_normalize_batter_derives_rates_from_counts():
    stats = normalize_batter_stats(
        {
            "atBats": "500",
            "plateAppearances": "560",
            "hits": "150",
            "doubles": 30,
            "homeRuns": 20,
            "baseOnBalls": 50,
            "hitByPitch": 5,
            "sacFlies": 5,
            "avg": ".999",
        }
    )

    assert stats.plate_appearances == 560
    assert stats.singles == 100
    assert stats.avg == pytest.approx(0.300)
    assert stats.obp == pytest.approx(205 / 560)
    assert stats.slg == pytest.approx((100 + 60 + 80) / 500)
    assert stats.ops == pytest.approx(stats.obp + stats.slg)


def test_normalize_batter_accepts_short_aliases():
    stats = normalize_batter_stats({"AB": 100, "H": 25, "HR": 5, "BB": 10, "SO": 20})

    assert stats.hits == 25
    assert stats.home_runs == 5
    assert stats.strikeouts == 20


def test_normalize_batter_backfills_hits_from_average():
    stats = normalize_batter_stats({"AB": 200, "AVG": ".250"})

    assert stats.hits == 50
    assert stats.avg == pytest.approx(0.25)


def test_normalize_batter_raises_plate_appearances_to_components():
    stats = normalize_batter_stats({"AB": 100, "BB": 10, "HBP": 2, "SF": 3, "PA": 90})

    assert stats.plate_appearances == 115


def test_normalize_batter_never_raises_on_garbage():
    stats = normalize_batter_stats({"atBats": "-.--", "hits": None, "homeRuns": "n/a", "avg": "abc"})

    assert stats.at_bats == 0
    assert stats.avg == 0.0
    for value in stats.model_dump().values():
        assert not (isinstance(value, float) and math.isnan(value))


def test_normalize_batter_non_mapping_is_empty():
    stats = normalize_batter_stats("nonsense")  # type: ignore[arg-type]

    assert stats.plate_appearances == 0
    assert stats.ops == 0.0


def test_normalize_reads_mlb_split_shape():
    split = {
        "season": 2023,
        "team": {"id": 147, "abbreviation": "NYY"},
        "stat": {"atBats": "400", "hits": "120"},
    }

    record = RawSeasonStat.from_payload(split)
    assert record.season == "2023"
    assert record.team == "NYY"

    stats = normalize_batter_stats(split)
    assert stats.avg == pytest.approx(0.3)


def test_normalize_pitcher_estimates_batters_faced():
    stats = normalize_pitcher_stats(
        {
            "gamesStarted": 30,
            "inningsPitched": "183.2",
            "strikeOuts": 200,
            "baseOnBalls": 50,
            "hits": 150,
            "earnedRuns": 60,
        }
    )

    innings = 183 + 2 / 3
    assert stats.outs == 551
    assert stats.innings_decimal == pytest.approx(innings)
    assert stats.innings_pitched == pytest.approx(183.2)
    assert stats.batters_faced == pytest.approx(innings * BATTERS_FACED_PER_INNING)
    assert stats.batters_faced_estimated is True
    assert stats.era == pytest.approx(9 * 60 / innings)
    assert stats.whip == pytest.approx(200 / innings)
    assert stats.k_rate == pytest.approx(200 / (innings * BATTERS_FACED_PER_INNING))


def test_normalize_pitcher_uses_reported_batters_faced():
    stats = normalize_pitcher_stats({"IP": "100.0", "BF": 420, "SO": 105})

    assert stats.batters_faced == 420
    assert stats.batters_faced_estimated is False
    assert stats.k_rate == pytest.approx(0.25)


def test_normalize_pitcher_prefers_outs_over_innings():
    stats = normalize_pitcher_stats({"outs": 100, "inningsPitched": "10.0"})

    assert stats.outs == 100


def test_normalize_pitcher_backfills_from_era_and_whip():
    stats = normalize_pitcher_stats({"IP": "90", "ERA": "4.00", "WHIP": "1.20", "BB": 30})

    assert stats.earned_runs == 40
    assert stats.hits_allowed == 78


def test_normalize_pitcher_without_innings_has_no_batters_faced():
    stats = normalize_pitcher_stats({"wins": "3"})

    assert stats.outs == 0
    assert stats.batters_faced == 0
    assert stats.batters_faced_estimated is False
    assert stats.era == 0.0


def test_oversized_counts_are_treated_as_missing():
    huge = json.loads('{"atBats": 1' + "0" * 400 + ', "hits": 1' + "0" * 400 + ', "walks": 5}')

    batter = normalize_batter_stats(huge)

    assert batter.at_bats == 0
    assert batter.hits == 0
    assert batter.plate_appearances == 5
    assert parse_count(10**400) == 0
    assert parse_count(MAX_COUNT + 1) == 0


def test_oversized_innings_are_treated_as_missing():
    pitcher = normalize_pitcher_stats({"inningsPitched": 10**400, "strikeOuts": 10})

    assert pitcher.outs == 0
    assert pitcher.batters_faced == 0
    assert parse_innings("1" + "0" * 400 + ".1") == 0
    assert parse_innings(10**400) == 0


def test_normalize_tolerates_non_string_keys():
    batter = normalize_batter_stats({1: "x", "hits": 3, "atBats": 10})

    assert batter.hits == 3
    assert batter.at_bats == 10
