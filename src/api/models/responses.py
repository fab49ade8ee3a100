"""Pydantic request and response models for API endpoints."""

from pydantic import BaseModel, Field


class FormSubmission(BaseModel):
    """Form submission event: field label -> submitted values."""

    named_values: dict[str, list[str]] = Field(alias="namedValues")


class UserErrorResponse(BaseModel):
    user: str
    reason: str


class AvailabilityResponse(BaseModel):
    """Classification of the configured users for the submitted window."""

    window_start: str  # ISO 8601
    window_end: str  # ISO 8601
    available: list[str]
    busy: list[str]
    errors: list[UserErrorResponse]
    totals: str  # "Checked: N, Available: a, Busy: b, Errors: e"
    report_sheet: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    users_configured: int
    report_writable: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    UNAUTHORIZED = "UNAUTHORIZED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REPORT_WRITE_ERROR = "REPORT_WRITE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
