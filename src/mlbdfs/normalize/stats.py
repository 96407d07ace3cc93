"""Convert raw season-stat payloads into normalized stat records.

Raw feeds deliver numbers as strings (``".301"``, ``"183.2"``, ``"-.--"``),
use several spellings for the same field and routinely omit fields. Nothing
in here raises for bad data: unparseable or absent values become ``0`` and
every rate is re-derived from counts by ``BatterStats.from_counts`` /
``PitcherStats.from_counts``.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Tuple, Union

from mlbdfs.models.raw import RawSeasonStat
from mlbdfs.models.stats import BatterStats, PitcherStats


logger = logging.getLogger(__name__)

BATTERS_FACED_PER_INNING = 4.3

# No real season or career line comes near this; larger values are feed garbage.
MAX_COUNT = 1_000_000

_PLACEHOLDERS = {"-", "--", "-.--", ".---", "---", "n/a", "na", "null", "none", "*"}

_BATTER_ALIASES: Mapping[str, Tuple[str, ...]] = {
    "games_played": ("gamesPlayed", "games_played", "G"),
    "at_bats": ("atBats", "at_bats", "AB"),
    "plate_appearances": ("plateAppearances", "plate_appearances", "PA"),
    "hits": ("hits", "H"),
    "doubles": ("doubles", "2B"),
    "triples": ("triples", "3B"),
    "home_runs": ("homeRuns", "home_runs", "HR"),
    "runs": ("runs", "R"),
    "rbi": ("rbi", "RBI"),
    "walks": ("baseOnBalls", "walks", "BB"),
    "strikeouts": ("strikeOuts", "strikeouts", "SO", "K"),
    "stolen_bases": ("stolenBases", "stolen_bases", "SB"),
    "caught_stealing": ("caughtStealing", "caught_stealing", "CS"),
    "hit_by_pitch": ("hitByPitch", "hit_by_pitch", "HBP"),
    "sacrifice_flies": ("sacFlies", "sacrifice_flies", "SF"),
}

_PITCHER_ALIASES: Mapping[str, Tuple[str, ...]] = {
    "games_played": ("gamesPlayed", "gamesPitched", "games_played", "G"),
    "games_started": ("gamesStarted", "games_started", "GS"),
    "wins": ("wins", "W"),
    "losses": ("losses", "L"),
    "saves": ("saves", "SV"),
    "holds": ("holds", "HLD"),
    "blown_saves": ("blownSaves", "blown_saves", "BS"),
    "quality_starts": ("qualityStarts", "quality_starts", "QS"),
    "complete_games": ("completeGames", "complete_games", "CG"),
    "shutouts": ("shutouts", "SHO"),
    "strikeouts": ("strikeOuts", "strikeouts", "SO", "K"),
    "walks": ("baseOnBalls", "walks", "BB"),
    "hits_allowed": ("hits", "hitsAllowed", "hits_allowed", "H"),
    "home_runs_allowed": ("homeRuns", "homeRunsAllowed", "home_runs_allowed", "HR"),
    "earned_runs": ("earnedRuns", "earned_runs", "ER"),
    "hit_batsmen": ("hitBatsmen", "hitByPitch", "hit_batsmen", "HBP"),
}

_INNINGS_KEYS = ("inningsPitched", "innings_pitched", "IP")
_OUTS_KEYS = ("outs",)
_BATTERS_FACED_KEYS = ("battersFaced", "batters_faced", "BF", "TBF")

RawInput = Union[RawSeasonStat, Mapping[str, Any], None]


def parse_number(value: Any) -> float:
    """Coerce a raw value to a finite float, defaulting to ``0.0``."""

    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        raw: Any = value
    else:
        raw = str(value).strip().replace(",", "")
        if not raw or raw.lower() in _PLACEHOLDERS:
            return 0.0
    try:
        number = float(raw)
    except (OverflowError, ValueError):
        logger.debug("Unparseable or out-of-range %s value; using 0", type(value).__name__)
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def parse_count(value: Any) -> int:
    number = parse_number(value)
    if number > MAX_COUNT:
        logger.debug("Count %s exceeds %s; using 0", number, MAX_COUNT)
        return 0
    return max(0, int(round(number)))


def parse_innings(value: Any) -> int:
    """Parse box-score innings notation into outs.

    ``"183.2"`` is 183 innings and two outs, not 183.2 innings. A fraction
    digit other than 0, 1 or 2 is malformed and adds no partial inning.
    """

    if value is None:
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = parse_number(value)
        if number <= 0 or number > MAX_COUNT:
            return 0
        whole = int(number)
        fraction = int(round((number - whole) * 10))
        if fraction == 10:
            whole, fraction = whole + 1, 0
        if fraction not in (0, 1, 2):
            logger.debug("Malformed innings fraction in %r; ignoring partial inning", value)
            fraction = 0
        return whole * 3 + fraction

    text = str(value).strip().replace(",", "")
    whole_text, _, fraction_text = text.partition(".")
    whole = parse_number(whole_text) if whole_text else 0.0
    if whole < 0 or whole > MAX_COUNT or (not whole_text and not fraction_text):
        return 0
    if whole != int(whole) or (whole == 0 and whole_text.strip("0")):
        logger.debug("Malformed innings value %r; using 0", value)
        return 0
    fraction_text = fraction_text.rstrip("0") or "0"
    if fraction_text not in ("0", "1", "2"):
        logger.debug("Malformed innings fraction in %r; ignoring partial inning", value)
        fraction_text = "0"
    return int(whole) * 3 + int(fraction_text)


def innings_to_decimal(value: Any) -> float:
    """``"183.2"`` -> ``183 + 2/3``."""

    return parse_innings(value) / 3


def _coerce_raw(raw: RawInput) -> RawSeasonStat:
    if isinstance(raw, RawSeasonStat):
        return raw
    return RawSeasonStat.from_payload(raw)


def normalize_batter_stats(raw: RawInput) -> BatterStats:
    """Normalize a raw batting line; never raises for malformed data."""

    record = _coerce_raw(raw)
    counts = {name: parse_count(record.get(*aliases)) for name, aliases in _BATTER_ALIASES.items()}

    at_bats = counts["at_bats"]
    if not record.has(*_BATTER_ALIASES["hits"]) and at_bats > 0:
        avg = parse_number(record.get("avg", "AVG"))
        if avg > 0:
            counts["hits"] = min(at_bats, int(round(avg * at_bats)))

    minimum_pa = at_bats + counts["walks"] + counts["hit_by_pitch"] + counts["sacrifice_flies"]
    if counts["plate_appearances"] < minimum_pa:
        if record.has(*_BATTER_ALIASES["plate_appearances"]):
            logger.debug(
                "Plate appearances %s below AB+BB+HBP+SF (%s) for season %s; using derived value",
                counts["plate_appearances"],
                minimum_pa,
                record.season,
            )
        counts["plate_appearances"] = minimum_pa

    return BatterStats.from_counts(**counts)


def normalize_pitcher_stats(raw: RawInput) -> PitcherStats:
    """Normalize a raw pitching line; never raises for malformed data.

    Batters faced falls back to ``4.3`` per inning when the feed omits it and
    the result carries ``batters_faced_estimated=True``.
    """

    record = _coerce_raw(raw)
    counts = {name: parse_count(record.get(*aliases)) for name, aliases in _PITCHER_ALIASES.items()}

    if record.has(*_OUTS_KEYS):
        outs = parse_count(record.get(*_OUTS_KEYS))
    else:
        outs = parse_innings(record.get(*_INNINGS_KEYS))
    innings = outs / 3

    if not record.has(*_PITCHER_ALIASES["earned_runs"]) and innings > 0:
        era = parse_number(record.get("era", "ERA"))
        if era > 0:
            counts["earned_runs"] = int(round(era * innings / 9))

    if not record.has(*_PITCHER_ALIASES["hits_allowed"]) and innings > 0:
        whip = parse_number(record.get("whip", "WHIP"))
        if whip > 0:
            counts["hits_allowed"] = max(0, int(round(whip * innings)) - counts["walks"])

    estimated = False
    if record.has(*_BATTERS_FACED_KEYS):
        batters_faced = float(parse_count(record.get(*_BATTERS_FACED_KEYS)))
    elif outs > 0:
        batters_faced = innings * BATTERS_FACED_PER_INNING
        estimated = True
    else:
        batters_faced = 0.0

    return PitcherStats.from_counts(
        outs=outs,
        batters_faced=batters_faced,
        batters_faced_estimated=estimated,
        **counts,
    )
