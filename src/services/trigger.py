"""
Form submission handling: parse the window, check calendars, write the report.
"""

import asyncio
import json
from pathlib import Path
from zoneinfo import ZoneInfo

from core.config import AVAILABILITY_TIMEZONE, AVAILABILITY_USERS, REPORT_PATH, RESULTS_SHEET_NAME
from core.validation import InputError, extract_form_fields, parse_window
from models.events import ClassificationResult, TimeWindow
from services.availability import FreeBusyQuery, check_availability
from services.calendar import query_free_busy
from services.reports import write_availability_report


async def handle_form_submission(
    named_values: dict[str, list[str]],
    users: list[str] | None = None,
    tz: ZoneInfo | None = None,
    report_path: Path | None = None,
    sheet_name: str | None = None,
    query: FreeBusyQuery = query_free_busy,
) -> tuple[ClassificationResult, TimeWindow]:
    """
    Run one availability check for a form submission.

    Input and report errors propagate; per-user lookup failures end up as
    error rows in the report.
    """
    print(f"Form submission: {json.dumps(named_values, ensure_ascii=False)}")

    users = AVAILABILITY_USERS if users is None else users
    if not users:
        raise InputError("No users configured to check (set AVAILABILITY_USERS)")

    date_str, start_str, end_str = extract_form_fields(named_values)
    window = parse_window(date_str, start_str, end_str, tz or ZoneInfo(AVAILABILITY_TIMEZONE))

    result = await check_availability(users, window, query=query)

    await asyncio.to_thread(
        write_availability_report,
        result,
        window,
        report_path or REPORT_PATH,
        sheet_name or RESULTS_SHEET_NAME,
    )
    print(result.totals_line())
    return result, window
