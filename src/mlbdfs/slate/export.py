"""CSV export helpers for projection pools."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from mlbdfs.models.projection import Projection


EXPORT_HEADERS: tuple[str, ...] = (
    "player_id",
    "name",
    "kind",
    "team",
    "opponent",
    "game_date",
    "salary",
    "site",
    "expected",
    "floor",
    "ceiling",
    "confidence",
    "value",
    "substituted_factors",
)


def _format(value: float | None) -> str:
    return "" if value is None else f"{value:.2f}"


def export_projections_to_csv(projections: Sequence[Projection]) -> str:
    """Render projections as CSV text, one row per player."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)

    for projection in projections:
        context = projection.context
        writer.writerow(
            [
                context.player_id,
                context.name,
                projection.kind,
                context.team or "",
                context.opponent or "",
                context.game_date.isoformat() if context.game_date else "",
                context.salary if context.salary is not None else "",
                projection.site,
                _format(projection.expected_points),
                _format(projection.floor_points),
                _format(projection.ceiling_points),
                _format(projection.confidence),
                _format(projection.value),
                "|".join(kind.value for kind in projection.substituted_factors),
            ]
        )

    return buffer.getvalue()


__all__ = [
    "EXPORT_HEADERS",
    "export_projections_to_csv",
]
