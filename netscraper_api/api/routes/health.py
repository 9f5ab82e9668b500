"""Health Checks — process liveness and storage reachability.

Invariants:
    - GET / always returns 200 "OK" if the process is up
    - GET /health/db reports {"db": "up" | "down"}
    - A faulting storage check becomes a 503 diagnostic response, never an unhandled error
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from netscraper_api.core.errors import ErrorCategory, ErrorSeverity
from netscraper_api.core.repository_protocols import SearchRepository
from netscraper_api.infrastructure.storage import get_repository

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def liveness():
    return "OK"


@router.get("/health/db")
async def database_health(repo: SearchRepository = Depends(get_repository)):
    """Storage check — includes connectivity to the durable backend."""
    try:
        reachable = await repo.ping()
    except Exception as e:
        logger.error(f"Storage health check failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": {
                    "code": "HEALTH_CHECK_FAILED",
                    "message": str(e),
                    "category": ErrorCategory.DATABASE.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
    return {"db": "up" if reachable else "down"}
