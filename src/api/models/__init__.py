"""API Pydantic models."""

from .responses import (
    AvailabilityResponse,
    ErrorCodes,
    ErrorResponse,
    FormSubmission,
    HealthResponse,
    UserErrorResponse,
)

__all__ = [
    "AvailabilityResponse",
    "ErrorCodes",
    "ErrorResponse",
    "FormSubmission",
    "HealthResponse",
    "UserErrorResponse",
]
