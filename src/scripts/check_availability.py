#!/usr/bin/env python3
"""
Check calendar availability for a time window and write the Excel report.

Runs the same pipeline as a form submission, with the form fields given
on the command line.

Usage:
    uv run python src/scripts/check_availability.py --date 9/25/2025 \
        --start "2:00:00 PM" --end "3:00:00 PM" --users a@x.com,b@x.com
"""

import argparse
import asyncio
import sys
import traceback
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import (
    FORM_FIELD_DATE,
    FORM_FIELD_END_TIME,
    FORM_FIELD_START_TIME,
    REPORT_PATH,
    RESULTS_SHEET_NAME,
)
from services.trigger import handle_form_submission


async def main(
    date_str: str,
    start_str: str,
    end_str: str,
    users: list[str] | None,
    output: Path,
    sheet_name: str,
):
    """Main entry point."""
    named_values = {
        FORM_FIELD_DATE: [date_str],
        FORM_FIELD_START_TIME: [start_str],
        FORM_FIELD_END_TIME: [end_str],
    }
    try:
        result, _window = await handle_form_submission(
            named_values, users=users, report_path=output, sheet_name=sheet_name
        )
        for err in result.errors:
            print(f"  Error for {err['user']}: {err['reason']}")
        print("\nDone!")
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Check calendar availability for a time window")
    parser.add_argument("--date", required=True, help="Date (M/D/YYYY), e.g. 9/25/2025")
    parser.add_argument("--start", required=True, help='Start time, e.g. "2:00:00 PM"')
    parser.add_argument("--end", required=True, help='End time, e.g. "3:00:00 PM"')
    parser.add_argument(
        "--users",
        help="Comma-separated calendars to check. Defaults to AVAILABILITY_USERS.",
    )
    parser.add_argument("--output", type=Path, default=REPORT_PATH, help="Report workbook path")
    parser.add_argument("--sheet", default=RESULTS_SHEET_NAME, help="Results sheet name")
    args = parser.parse_args()

    users = [u.strip() for u in args.users.split(",") if u.strip()] if args.users else None
    asyncio.run(main(args.date, args.start, args.end, users, args.output, args.sheet))
