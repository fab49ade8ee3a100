"""Tests for services/trigger.py"""

from zoneinfo import ZoneInfo

import pytest
from openpyxl import load_workbook

from conftest import make_query
from core.validation import InputError, MissingFieldError, ParseError
from services.trigger import handle_form_submission

FREE = {"errors": [], "busy": []}
BUSY = {"errors": [], "busy": [{"start": "2025-09-25T14:30:00Z", "end": "2025-09-25T14:45:00Z"}]}


class TestHandleFormSubmission:
    @pytest.mark.asyncio
    async def test_full_pipeline(self, named_values, report_path):
        query = make_query({"a@x.com": FREE, "b@x.com": BUSY})

        result, window = await handle_form_submission(
            named_values,
            users=["a@x.com", "b@x.com"],
            tz=ZoneInfo("UTC"),
            report_path=report_path,
            sheet_name="Results",
            query=query,
        )

        assert window.start.hour == 14 and window.end.hour == 15
        assert result.available == ["a@x.com"]
        assert result.busy == ["b@x.com"]
        assert result.errors == []

        ws = load_workbook(report_path)["Results"]
        assert ws["A9"].value is None
        assert ws["A7"].value == "TOTALS:"
        assert ws["A8"].value == "Checked: 2, Available: 1, Busy: 1, Errors: 0"

    @pytest.mark.asyncio
    async def test_zone_changes_queried_instants(self, named_values, report_path):
        # 14:00-15:00 in Moscow is 11:00-12:00 UTC, so the 14:30Z block is outside
        result, window = await handle_form_submission(
            named_values,
            users=["b@x.com"],
            tz=ZoneInfo("Europe/Moscow"),
            report_path=report_path,
            query=make_query({"b@x.com": BUSY}),
        )
        assert result.available == ["b@x.com"]

    @pytest.mark.asyncio
    async def test_missing_field_is_fatal(self, named_values, report_path):
        del named_values["Start Time"]
        query = make_query({"a@x.com": FREE})

        with pytest.raises(MissingFieldError):
            await handle_form_submission(named_values, users=["a@x.com"], report_path=report_path, query=query)

        assert query.calls == []
        assert not report_path.exists()

    @pytest.mark.asyncio
    async def test_bad_time_is_fatal(self, named_values, report_path):
        named_values["End Time"] = ["15:00"]
        with pytest.raises(ParseError):
            await handle_form_submission(
                named_values, users=["a@x.com"], report_path=report_path, query=make_query({})
            )
        assert not report_path.exists()

    @pytest.mark.asyncio
    async def test_no_users_configured(self, named_values, report_path):
        with pytest.raises(InputError):
            await handle_form_submission(named_values, users=[], report_path=report_path, query=make_query({}))
