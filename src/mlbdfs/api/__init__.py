"""REST API for the mlbdfs projection engine."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException, Query

from mlbdfs.api.schemas import (
    CareerRequest,
    RankedProjectionResponse,
    ScoringTableResponse,
    SkippedEntryResponse,
    SlateProjectionRequest,
    SlateProjectionResponse,
    SlateSummaryResponse,
)
from mlbdfs.config import ProjectionSettings, ScoringConfigError, ScoringTable, get_table, iter_tables
from mlbdfs.config_loader import ScoringProfile
from mlbdfs.ingest import PlayerEntry, parse_slate
from mlbdfs.models import CareerProfile, Projection
from mlbdfs.normalize import (
    build_batter_career,
    build_pitcher_career,
    normalize_batter_stats,
    normalize_pitcher_stats,
)
from mlbdfs.projection import project_request, project_slate
from mlbdfs.slate import FilterCriteria, FilterSummary, filter_projections


logger = logging.getLogger(__name__)

PLAYER_KINDS = ("batter", "pitcher")


def _summary_response(summary: FilterSummary) -> SlateSummaryResponse:
    return SlateSummaryResponse(
        available=summary.available,
        selected=summary.selected,
        expected_mean=summary.expected_mean,
        expected_median=summary.expected_median,
        expected_std=summary.expected_std,
        confidence_mean=summary.confidence_mean,
        value_mean=summary.value_mean,
        top_tier_threshold=summary.top_tier_threshold,
        mid_tier_threshold=summary.mid_tier_threshold,
    )


def _require_kind(kind: str) -> str:
    if kind not in PLAYER_KINDS:
        raise HTTPException(status_code=404, detail=f"Unknown player kind {kind!r}")
    return kind


def create_app(default_site: str = "DK", settings: ProjectionSettings | None = None) -> FastAPI:
    app = FastAPI(title="mlbdfs projections")
    app.state.settings = settings or ProjectionSettings.from_env()
    app.state.default_site = default_site

    def resolve_table(site: str | None, custom: ScoringProfile | None = None) -> ScoringTable:
        if custom is not None:
            try:
                return custom.to_table()
            except ScoringConfigError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
        try:
            return get_table(site or app.state.default_site)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/scoring-tables", response_model=list[ScoringTableResponse])
    async def scoring_tables() -> list[ScoringTableResponse]:
        return [
            ScoringTableResponse(site=table.site, name=table.name, batter=table.batter, pitcher=table.pitcher)
            for table in iter_tables()
        ]

    @app.post("/normalize/{kind}")
    async def normalize(kind: str, payload: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
        _require_kind(kind)
        if kind == "batter":
            return normalize_batter_stats(payload).model_dump()
        return normalize_pitcher_stats(payload).model_dump()

    @app.post("/career/{kind}", response_model=CareerProfile)
    async def career(kind: str, payload: CareerRequest) -> CareerProfile:
        _require_kind(kind)
        if kind == "batter":
            return build_batter_career(payload.splits)
        return build_pitcher_career(payload.splits)

    @app.post("/projections/slate", response_model=SlateProjectionResponse)
    def projections_slate(
        payload: SlateProjectionRequest,
        site: str | None = Query(None),
    ) -> SlateProjectionResponse:
        custom = None
        if payload.scoring is not None:
            custom = ScoringProfile(
                site=payload.scoring.site,
                name=payload.scoring.name,
                batter=payload.scoring.batter,
                pitcher=payload.scoring.pitcher,
            )
        table = resolve_table(site, custom)
        loaded = parse_slate(payload.players)
        projections = project_slate(loaded.requests, table=table, settings=app.state.settings)
        criteria = FilterCriteria(
            kind=payload.kind,
            min_confidence=payload.min_confidence,
            min_expected=payload.min_expected,
            min_value=payload.min_value,
            include_teams=tuple(payload.include_teams or ()),
            exclude_teams=tuple(payload.exclude_teams or ()),
            limit=payload.limit,
            sort_by=payload.sort_by,
            sort_direction=payload.sort_direction,
        )
        result = filter_projections(projections, criteria)
        logger.info(
            "Slate request projected %s players (%s skipped, %s selected)",
            len(projections),
            len(loaded.skipped),
            result.summary.selected,
        )
        return SlateProjectionResponse(
            site=table.site,
            pool_summary=_summary_response(result.pool_summary),
            summary=_summary_response(result.summary),
            projections=[
                RankedProjectionResponse(
                    rank=item.rank,
                    tier=item.tier,
                    value=item.projection.value,
                    projection=item.projection,
                )
                for item in result.projections
            ],
            skipped=[
                SkippedEntryResponse(index=item.index, player_id=item.player_id, reason=item.reason)
                for item in loaded.skipped
            ],
        )

    @app.post("/projections/{kind}", response_model=Projection)
    async def projection(
        kind: str,
        payload: PlayerEntry,
        site: str | None = Query(None),
    ) -> Projection:
        _require_kind(kind)
        table = resolve_table(site)
        try:
            request = payload.to_request(kind)
            return project_request(request, table=table, settings=app.state.settings)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    return app
