"""Projection pool utilities (filtering, export, etc.)."""

from .filtering import (
    FilterCriteria,
    FilterResult,
    FilterSummary,
    RankedProjection,
    filter_projections,
)
from .export import export_projections_to_csv

__all__ = [
    "FilterCriteria",
    "FilterResult",
    "FilterSummary",
    "RankedProjection",
    "filter_projections",
    "export_projections_to_csv",
]
