"""Form submission endpoint for availability checks."""

import time

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import TriggerOptions, get_trigger_options, verify_api_key
from api.logging import RequestLog, log_request
from api.models.responses import (
    AvailabilityResponse,
    ErrorCodes,
    FormSubmission,
    UserErrorResponse,
)
from core.validation import InputError
from services.reports import ReportWriteError
from services.trigger import handle_form_submission

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.post("/forms/availability", response_model=AvailabilityResponse)
async def form_submission_endpoint(
    request: Request,
    submission: FormSubmission,
    options: TriggerOptions = Depends(get_trigger_options),
    _api_key: str = Depends(verify_api_key),
):
    """
    Check the configured users' availability for a submitted date and time range.

    Rebuilds the results sheet and returns the same classification as JSON.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/v1/forms/availability",
        method="POST",
        client_ip=get_client_ip(request),
    )

    try:
        result, window = await handle_form_submission(
            submission.named_values,
            users=options.users,
            report_path=options.report_path,
            sheet_name=options.sheet_name,
            query=options.query,
        )

        request_log.status_code = 200
        request_log.window_start = window.start.isoformat()
        request_log.window_end = window.end.isoformat()
        request_log.users_checked = result.total
        request_log.available_count = len(result.available)
        request_log.busy_count = len(result.busy)
        request_log.error_count = len(result.errors)
        for err in result.errors:
            request_log.details.append(("user_error", f"{err['user']}: {err['reason']}"))
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        return AvailabilityResponse(
            window_start=window.start.isoformat(),
            window_end=window.end.isoformat(),
            available=result.available,
            busy=result.busy,
            errors=[UserErrorResponse(**err) for err in result.errors],
            totals=result.totals_line(),
            report_sheet=options.sheet_name,
        )

    except InputError as e:
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = str(e)
        request_log.details.append(("validation_error", str(e)))
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Form submission validation failed",
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": [str(e)],
            },
        )

    except ReportWriteError as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.REPORT_WRITE_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Could not write availability report",
                "code": ErrorCodes.REPORT_WRITE_ERROR,
                "details": [str(e)],
            },
        )

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        # Always log the request
        try:
            log_request(request_log)
        except Exception as e:
            # Don't fail the request if logging fails
            print(f"Failed to log request {request_log.request_id}: {e}")
