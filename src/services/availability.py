"""
Availability classification from free/busy responses.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime

from core.config import FREEBUSY_MAX_CONCURRENCY, FREEBUSY_TIMEOUT_SECONDS
from models.events import ClassificationResult, FreeBusyResponse, LookupOutcome, TimeWindow
from services.calendar import query_free_busy

FreeBusyQuery = Callable[[str, TimeWindow], Awaitable[FreeBusyResponse]]


def overlaps(window: TimeWindow, busy_start: datetime, busy_end: datetime) -> bool:
    """Half-open overlap test; intervals that only touch the window do not overlap."""
    return busy_start < window.end and busy_end > window.start


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        raise ValueError(f"Busy interval timestamp has no time zone: {value}")
    return parsed


def classify_response(user: str, response: FreeBusyResponse, window: TimeWindow) -> LookupOutcome:
    """
    Classify one user's free/busy response.

    A service-level error wins over busy data. The first overlapping busy
    interval is enough to mark the user busy.
    """
    errors = response.get("errors") or []
    if errors:
        return LookupOutcome(user=user, status="error", reason=str(errors[0]))

    for interval in response.get("busy") or []:
        start = _parse_timestamp(interval["start"])
        end = _parse_timestamp(interval["end"])
        if overlaps(window, start, end):
            return LookupOutcome(user=user, status="busy")

    return LookupOutcome(user=user, status="available")


def fold_outcomes(outcomes: list[LookupOutcome]) -> ClassificationResult:
    """Fold per-user outcomes into the three-way classification, keeping order."""
    result = ClassificationResult()
    for outcome in outcomes:
        if outcome.status == "available":
            result.available.append(outcome.user)
        elif outcome.status == "busy":
            result.busy.append(outcome.user)
        else:
            result.errors.append({"user": outcome.user, "reason": outcome.reason})
    return result


async def check_availability(
    users: list[str],
    window: TimeWindow,
    query: FreeBusyQuery = query_free_busy,
    timeout: float = FREEBUSY_TIMEOUT_SECONDS,
    max_concurrency: int = FREEBUSY_MAX_CONCURRENCY,
) -> ClassificationResult:
    """
    Check every user's calendar for the window.

    Lookups run concurrently (bounded by max_concurrency); results are
    collected in input order. A failing or timed-out lookup becomes an error
    entry for that user and never aborts the batch.
    """
    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def lookup(user: str) -> LookupOutcome:
        async with semaphore:
            try:
                response = await asyncio.wait_for(query(user, window), timeout=timeout)
                outcome = classify_response(user, response, window)
            except asyncio.TimeoutError as e:
                # wait_for raises without a message; transport timeouts carry one
                outcome = LookupOutcome(
                    user=user,
                    status="error",
                    reason=str(e) or f"Free/busy query timed out after {timeout:g}s",
                )
            except Exception as e:
                outcome = LookupOutcome(user=user, status="error", reason=str(e) or type(e).__name__)

        note = f" ({outcome.reason})" if outcome.reason else ""
        print(f"  {user}: {outcome.status}{note}")
        return outcome

    print(f"Checking {len(users)} user(s) from {window.start.isoformat()} to {window.end.isoformat()}...")
    outcomes = await asyncio.gather(*(lookup(user) for user in users))
    return fold_outcomes(list(outcomes))
