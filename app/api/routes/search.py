"""Search routes - published research objects, filtered and normalized."""

import time
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_search_pipeline
from app.core.logging import get_logger
from app.schemas.search import FilterCriteria, SearchRequest
from app.services.search_service import SearchPipeline

router = APIRouter(prefix="/search", tags=["search"])
log = get_logger("search_routes")


def _search_response(pipeline: SearchPipeline, criteria: FilterCriteria) -> JSONResponse:
    start = time.perf_counter()
    request_id = str(uuid.uuid4())

    results = pipeline.search_all(criteria)

    latency_ms = int((time.perf_counter() - start) * 1000)
    log.info(f"[{request_id}] search ({criteria.summary()}) -> {len(results)} records in {latency_ms}ms")

    return JSONResponse(
        content=results,
        headers={
            "Cache-Control": "no-cache",
            "X-Request-ID": request_id,
            "X-API-Latency-Ms": str(latency_ms),
        },
    )


@router.get("")
def list_published(
    repo: Optional[str] = Query(None, description="Restrict to one repository (exact name)"),
    pipeline: SearchPipeline = Depends(get_search_pipeline),
):
    """
    List every published research object.

    A research object is published once its status history holds a success
    entry. Each result carries DOI, Publication Date and CreatorName.
    """
    return _search_response(pipeline, FilterCriteria.for_repository(repo))


@router.post("")
def filter_published(
    body: SearchRequest,
    repo: Optional[str] = Query(None, description="Restrict to one repository (exact name)"),
    pipeline: SearchPipeline = Depends(get_search_pipeline),
):
    """
    Filter published research objects.

    Body keys (all required, empty string = no filter):
    - Creator: case-insensitive pattern matched against creator identifiers
    - Start Date / End Date: MM/DD/YYYY publication date bounds
    - Search String: full-text phrase over the whole record
    - Title: case-insensitive pattern matched against the title
    """
    return _search_response(pipeline, body.to_criteria(repo))
