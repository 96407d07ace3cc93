"""Scoring engine."""

from .engine import BatterEventCounts, PitcherEventCounts, score_batter, score_pitcher

__all__ = [
    "BatterEventCounts",
    "PitcherEventCounts",
    "score_batter",
    "score_pitcher",
]
