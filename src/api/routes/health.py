"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core import config

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if the bid report is readable, 503 otherwise.
    """
    bid_report_available = config.BID_REPORT_PATH.exists()
    timestamp = datetime.now(timezone.utc).isoformat()

    if bid_report_available:
        return HealthResponse(
            status="healthy",
            version=config.API_VERSION,
            bid_report_available=True,
            timestamp=timestamp,
        )
    return JSONResponse(
        status_code=503,
        content=HealthResponse(
            status="unhealthy",
            version=config.API_VERSION,
            bid_report_available=False,
            timestamp=timestamp,
            error="Bid report not found",
        ).model_dump(),
    )
