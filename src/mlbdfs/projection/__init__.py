"""Projection builder and slate runner."""

from .batch import default_workers, project_slate
from .builder import (
    ProjectionRequest,
    batter_sample_confidence,
    build_batter_projection,
    build_pitcher_projection,
    pitcher_sample_confidence,
    project_request,
)

__all__ = [
    "ProjectionRequest",
    "batter_sample_confidence",
    "build_batter_projection",
    "build_pitcher_projection",
    "default_workers",
    "pitcher_sample_confidence",
    "project_request",
    "project_slate",
]
