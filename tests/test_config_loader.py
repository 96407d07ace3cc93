import json

import pytest

from mlbdfs.config import ScoringConfigError, get_table
from mlbdfs.config_loader import ScoringProfile


def test_profile_round_trip(tmp_path):
    path = tmp_path / "dk.json"
    ScoringProfile.from_table(get_table("DK")).save(path)

    loaded = ScoringProfile.load(path)
    table = loaded.to_table()

    assert table.site == "DK"
    assert table.batter == get_table("DK").batter
    assert table.pitcher == get_table("DK").pitcher


def test_profile_defaults_name_and_site(tmp_path):
    dk = get_table("DK")
    path = tmp_path / "home_league.json"
    path.write_text(json.dumps({"batter": dk.batter, "pitcher": dk.pitcher}), encoding="utf-8")

    profile = ScoringProfile.load(path)

    assert profile.site == "CUSTOM"
    assert profile.name == "home_league"


def test_incomplete_profile_fails_validation(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"site": "X", "batter": {"single": 3}}), encoding="utf-8")

    with pytest.raises(ScoringConfigError, match="missing batter"):
        ScoringProfile.load(path).to_table()
