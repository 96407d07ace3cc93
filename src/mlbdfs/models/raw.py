"""Untrusted raw season-stat records as delivered by upstream data feeds."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


logger = logging.getLogger(__name__)


class RawSeasonStat(BaseModel):
    """Loosely typed season line. Values may be strings, numbers or missing."""

    season: Optional[str] = None
    team: Optional[str] = None
    values: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_payload(cls, payload: Any) -> "RawSeasonStat":
        """Build from an MLB Stats API split or a flat stat mapping.

        Anything that is not a mapping produces an empty record.
        """

        if isinstance(payload, RawSeasonStat):
            return payload
        if not isinstance(payload, Mapping):
            logger.debug("Ignoring non-mapping stat payload of type %s", type(payload).__name__)
            return cls()

        stat = payload.get("stat")
        if isinstance(stat, Mapping):
            values = {str(key): value for key, value in stat.items()}
        else:
            values = {str(key): value for key, value in payload.items() if key not in {"season", "team"}}

        season = payload.get("season")
        team = payload.get("team")
        if isinstance(team, Mapping):
            team = team.get("abbreviation") or team.get("name")

        return cls(
            season=str(season) if season not in (None, "") else None,
            team=str(team) if team not in (None, "") else None,
            values=values,
        )

    def get(self, *keys: str) -> Any:
        """Return the first present value among ``keys``."""

        for key in keys:
            value = self.values.get(key)
            if value is not None and value != "":
                return value
        return None

    def has(self, *keys: str) -> bool:
        return self.get(*keys) is not None
