"""FastAPI dependencies for authentication and shared resources."""

import secrets
from dataclasses import dataclass
from pathlib import Path

from fastapi import Header, HTTPException, status

from api.models.responses import ErrorCodes
from core.config import (
    AVAILABILITY_API_KEY,
    AVAILABILITY_USERS,
    REPORT_PATH,
    RESULTS_SHEET_NAME,
)
from services.availability import FreeBusyQuery
from services.calendar import query_free_busy


async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """
    Verify API key from X-API-Key header.

    Raises:
        HTTPException: 401 if key is missing or invalid
    """
    if not AVAILABILITY_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "API key not configured on server",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    # Use constant-time comparison to prevent timing attacks
    if not secrets.compare_digest(x_api_key, AVAILABILITY_API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing API key",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": [],
            },
        )

    return x_api_key


@dataclass
class TriggerOptions:
    """Where a form submission is checked against and reported to."""

    users: list[str]
    report_path: Path
    sheet_name: str
    query: FreeBusyQuery


def get_trigger_options() -> TriggerOptions:
    """Options built from configuration; overridden in tests."""
    return TriggerOptions(
        users=list(AVAILABILITY_USERS),
        report_path=REPORT_PATH,
        sheet_name=RESULTS_SHEET_NAME,
        query=query_free_busy,
    )
