"""Pydantic models for API I/O."""

from .projection import (
    CareerRequest,
    RankedProjectionResponse,
    ScoringTablePayload,
    ScoringTableResponse,
    SkippedEntryResponse,
    SlateProjectionRequest,
    SlateProjectionResponse,
    SlateSummaryResponse,
)

__all__ = [
    "CareerRequest",
    "RankedProjectionResponse",
    "ScoringTablePayload",
    "ScoringTableResponse",
    "SkippedEntryResponse",
    "SlateProjectionRequest",
    "SlateProjectionResponse",
    "SlateSummaryResponse",
]
