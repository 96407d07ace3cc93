"""Factor adjustments produced by ballpark/weather/matchup providers."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field, FiniteFloat, model_validator
from pydantic.config import ConfigDict


class FactorKind(str, Enum):
    BALLPARK = "ballpark"
    WEATHER = "weather"
    PLATOON = "platoon"
    MATCHUP = "matchup"
    OPPONENT = "opponent"
    RECENT_FORM = "recent_form"


class FactorMode(str, Enum):
    MULTIPLIER = "multiplier"
    ADDITIVE = "additive"


# Multipliers are neutral at 1.0; additive deltas are per-opportunity rate
# changes and are neutral at 0.0.
FACTOR_MODES: Mapping[FactorKind, FactorMode] = {
    FactorKind.BALLPARK: FactorMode.MULTIPLIER,
    FactorKind.WEATHER: FactorMode.MULTIPLIER,
    FactorKind.PLATOON: FactorMode.MULTIPLIER,
    FactorKind.MATCHUP: FactorMode.MULTIPLIER,
    FactorKind.OPPONENT: FactorMode.MULTIPLIER,
    FactorKind.RECENT_FORM: FactorMode.ADDITIVE,
}


class FactorAdjustment(BaseModel):
    """Single provider output.

    ``value`` applies to every scoring category unless ``by_category`` holds
    an override for that category.
    """

    kind: FactorKind
    value: FiniteFloat
    confidence_contribution: float = Field(default=0.0, ge=0.0, le=100.0)
    by_category: Dict[str, FiniteFloat] = Field(default_factory=dict)
    note: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _multipliers_not_negative(self) -> "FactorAdjustment":
        if FACTOR_MODES[self.kind] is FactorMode.MULTIPLIER:
            values = [self.value, *self.by_category.values()]
            if min(values) < 0:
                raise ValueError(f"{self.kind.value} multiplier must not be negative")
        return self

    @property
    def mode(self) -> FactorMode:
        return FACTOR_MODES[self.kind]

    @property
    def is_multiplier(self) -> bool:
        return self.mode is FactorMode.MULTIPLIER

    def value_for(self, category: str) -> float:
        return self.by_category.get(category, self.value)

    @classmethod
    def neutral(cls, kind: FactorKind | str, note: str | None = None) -> "FactorAdjustment":
        kind = FactorKind(kind)
        value = 1.0 if FACTOR_MODES[kind] is FactorMode.MULTIPLIER else 0.0
        return cls(kind=kind, value=value, confidence_contribution=0.0, note=note or "neutral")
