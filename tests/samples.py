"""Sample raw payloads shared by the test modules."""

from __future__ import annotations

import copy
from typing import Any, Dict


BATTER_ENTRY: Dict[str, Any] = {
    "kind": "batter",
    "lineup_slot": 2,
    "context": {
        "player_id": "b1",
        "name": "Aaron Judge",
        "team": "NYY",
        "opponent": "BOS",
        "game_date": "2024-06-14",
        "handedness": "R",
        "opposing_handedness": "L",
        "salary": 6200,
    },
    "stats": {
        "gamesPlayed": "150",
        "atBats": "550",
        "hits": "160",
        "doubles": "30",
        "triples": "1",
        "homeRuns": "45",
        "runs": "110",
        "rbi": "120",
        "baseOnBalls": "90",
        "strikeOuts": "170",
        "hitByPitch": "5",
        "sacFlies": "4",
        "stolenBases": "8",
        "avg": ".291",
    },
    "park": {"home_runs": 1.15, "right_handed": 1.05},
    "weather": {"temperature_f": 85, "wind_speed_mph": 8, "wind_direction": "Out To CF"},
}

PITCHER_ENTRY: Dict[str, Any] = {
    "kind": "pitcher",
    "context": {
        "player_id": "p1",
        "name": "Gerrit Cole",
        "team": "NYY",
        "opponent": "BOS",
        "salary": 10000,
    },
    "stats": {
        "gamesStarted": 30,
        "gamesPlayed": 30,
        "inningsPitched": "190.1",
        "strikeOuts": 220,
        "baseOnBalls": 45,
        "hits": 150,
        "earnedRuns": 60,
        "wins": 14,
        "completeGames": 1,
        "shutouts": 1,
        "battersFaced": 770,
    },
    "opponent": {
        "atBats": 5400,
        "plateAppearances": 6000,
        "hits": 1350,
        "baseOnBalls": 500,
        "strikeOuts": 1300,
        "doubles": 270,
        "homeRuns": 190,
    },
    "weather": {"dome": True},
}


def batter_entry(**overrides: Any) -> Dict[str, Any]:
    entry = copy.deepcopy(BATTER_ENTRY)
    entry.update(overrides)
    return entry


def pitcher_entry(**overrides: Any) -> Dict[str, Any]:
    entry = copy.deepcopy(PITCHER_ENTRY)
    entry.update(overrides)
    return entry


def slate_payload() -> Dict[str, Any]:
    return {"players": [batter_entry(), pitcher_entry()]}
