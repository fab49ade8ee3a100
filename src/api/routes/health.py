"""Health check endpoint."""

import os
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import TriggerOptions, get_trigger_options
from api.models.responses import HealthResponse
from core.config import API_VERSION

router = APIRouter()


def report_location_writable(options: TriggerOptions) -> bool:
    """True if the report file (or its nearest existing parent) can be written."""
    target = options.report_path
    if target.exists():
        return os.access(target, os.W_OK)
    for parent in target.parents:
        if parent.exists():
            return os.access(parent, os.W_OK)
    return False


@router.get("/health", response_model=HealthResponse)
async def health_check(options: TriggerOptions = Depends(get_trigger_options)):
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if no users are configured or the report
    location is not writable.
    """
    users_configured = len(options.users)
    report_writable = report_location_writable(options)
    timestamp = datetime.now(timezone.utc).isoformat()

    if users_configured and report_writable:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            users_configured=users_configured,
            report_writable=True,
            timestamp=timestamp,
        )

    error = "No users configured" if not users_configured else "Report location not writable"
    return JSONResponse(
        status_code=503,
        content=HealthResponse(
            status="unhealthy",
            version=API_VERSION,
            users_configured=users_configured,
            report_writable=report_writable,
            timestamp=timestamp,
            error=error,
        ).model_dump(),
    )
