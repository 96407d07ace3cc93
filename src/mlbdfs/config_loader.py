"""Persist and load custom scoring profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from mlbdfs.config.scoring import ScoringTable


@dataclass
class ScoringProfile:
    site: str
    name: str
    batter: Dict[str, float] = field(default_factory=dict)
    pitcher: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "ScoringProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            site=str(data.get("site", "CUSTOM")),
            name=str(data.get("name", path.stem)),
            batter=data.get("batter", {}),
            pitcher=data.get("pitcher", {}),
        )

    @classmethod
    def from_table(cls, table: ScoringTable) -> "ScoringProfile":
        return cls(site=table.site, name=table.name, batter=dict(table.batter), pitcher=dict(table.pitcher))

    def save(self, path: Path) -> None:
        payload = {
            "site": self.site,
            "name": self.name,
            "batter": self.batter,
            "pitcher": self.pitcher,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def to_table(self) -> ScoringTable:
        """Validate into a ScoringTable; raises ScoringConfigError on bad input."""

        return ScoringTable(site=self.site, name=self.name, batter=dict(self.batter), pitcher=dict(self.pitcher))
