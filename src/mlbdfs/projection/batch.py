"""Run projections for a whole slate, serially or across worker processes."""

from __future__ import annotations

import logging
import multiprocessing as mp
import os
import time
from functools import partial
from typing import Iterable, List

from mlbdfs.config.scoring import ScoringTable, get_table
from mlbdfs.config.settings import (
    DEFAULT_SETTINGS,
    DEFAULT_WEIGHTS,
    WORKERS_ENV,
    ConfidenceWeights,
    ProjectionSettings,
    _env_int,
)
from mlbdfs.models.projection import Projection

from .builder import ProjectionRequest, project_request


logger = logging.getLogger(__name__)

SERIAL_THRESHOLD = 64


def default_workers() -> int:
    return _env_int(WORKERS_ENV, min(4, os.cpu_count() or 1), low=1)


def project_slate(
    requests: Iterable[ProjectionRequest],
    *,
    table: ScoringTable | None = None,
    settings: ProjectionSettings = DEFAULT_SETTINGS,
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
    workers: int | None = None,
    serial_threshold: int = SERIAL_THRESHOLD,
) -> List[Projection]:
    """Project every request, preserving input order.

    Slates smaller than ``serial_threshold`` or a single worker run in-process;
    larger slates are mapped over a ``spawn`` process pool.
    """

    request_list = list(requests)
    table = table or get_table("DK")
    worker_count = workers if workers is not None else default_workers()
    job = partial(project_request, table=table, settings=settings, weights=weights)
    started = time.perf_counter()

    if worker_count <= 1 or len(request_list) < serial_threshold:
        results = [job(request) for request in request_list]
        logger.info(
            "Projected %s players serially in %.2fs (site=%s)",
            len(results),
            time.perf_counter() - started,
            table.site,
        )
        return results

    worker_count = min(worker_count, len(request_list))
    chunksize = max(1, len(request_list) // (worker_count * 4))
    ctx = mp.get_context("spawn")
    with ctx.Pool(processes=worker_count) as pool:
        results = pool.map(job, request_list, chunksize=chunksize)
    logger.info(
        "Projected %s players across %s workers in %.2fs (site=%s)",
        len(results),
        worker_count,
        time.perf_counter() - started,
        table.site,
    )
    return results
