"""
Health check endpoint.

GET /health - reports whether the link store answers and how much it holds.
Rules:
- Store reachable → "healthy" (200).
- Store raises → "unhealthy" (503).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dependencies import get_store
from schemas.dto.responses.common import HealthResponse
from shared.logging import get_logger
from storage.protocol import LinkStore

log = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def health_check(store: LinkStore = Depends(get_store)) -> JSONResponse:
    checks: dict = {}
    overall = "healthy"

    try:
        counts = store.counts()
        checks["store"] = "ok"
        checks["links"] = counts["links"]
        checks["click_events"] = counts["clicks"]
    except Exception as e:
        log.error("health_check_store_error", error=str(e))
        checks["store"] = "error"
        overall = "unhealthy"

    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(
        status_code=status_code,
        content={"status": overall, "checks": checks},
    )
