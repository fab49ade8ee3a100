"""
Free/busy lookups against MS Graph calendars.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from msgraph.generated.models.date_time_time_zone import DateTimeTimeZone
from msgraph.generated.users.item.calendar.get_schedule.get_schedule_post_request_body import (
    GetSchedulePostRequestBody,
)

from core.graph_client import get_graph_client
from models.events import BusyInterval, FreeBusyResponse, TimeWindow


def to_utc_iso(dt: datetime) -> str:
    """Format an aware datetime as an ISO-8601 UTC instant ('...Z')."""
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_free_busy_request(user: str, window: TimeWindow) -> dict:
    """Free/busy request for exactly one calendar over the window."""
    return {
        "timeMin": to_utc_iso(window.start),
        "timeMax": to_utc_iso(window.end),
        "items": [{"id": user}],
    }


def parse_graph_datetime(value: DateTimeTimeZone) -> datetime:
    """
    Convert a Graph DateTimeTimeZone into an aware datetime.

    Graph returns 7 fractional digits (e.g. '2025-09-25T14:30:00.0000000'),
    which are dropped; the zone defaults to UTC.
    """
    if value is None or not value.date_time:
        raise ValueError("Schedule item is missing a timestamp")
    naive = datetime.fromisoformat(value.date_time.split(".")[0])
    return naive.replace(tzinfo=ZoneInfo(value.time_zone or "UTC"))


def _is_free(status) -> bool:
    # FreeBusyStatus enum, or a bare string from older SDK builds
    return str(getattr(status, "value", status)).lower() == "free"


async def query_free_busy(user: str, window: TimeWindow) -> FreeBusyResponse:
    """
    Query one user's schedule for the window via calendar/getSchedule.

    Returns the service-level errors reported for the calendar and every
    non-free schedule item as a busy interval.
    """
    graph = get_graph_client()
    request = build_free_busy_request(user, window)

    body = GetSchedulePostRequestBody(
        schedules=[item["id"] for item in request["items"]],
        start_time=DateTimeTimeZone(date_time=request["timeMin"].rstrip("Z"), time_zone="UTC"),
        end_time=DateTimeTimeZone(date_time=request["timeMax"].rstrip("Z"), time_zone="UTC"),
    )
    response = await graph.users.by_user_id(user).calendar.get_schedule.post(body)
    schedules = response.value if response and response.value else []

    info = next(
        (s for s in schedules if (s.schedule_id or "").lower() == user.lower()),
        schedules[0] if schedules else None,
    )
    if info is None:
        raise ValueError(f"No schedule returned for {user}")

    if info.error:
        reason = info.error.message or info.error.response_code or "Unknown error"
        return {"errors": [reason], "busy": []}

    busy: list[BusyInterval] = []
    for item in info.schedule_items or []:
        if _is_free(item.status):
            continue
        busy.append(
            {
                "start": parse_graph_datetime(item.start).isoformat(),
                "end": parse_graph_datetime(item.end).isoformat(),
            }
        )
    return {"errors": [], "busy": busy}
