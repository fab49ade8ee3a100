"""Tests for services/availability.py"""

import asyncio
from datetime import datetime, timedelta

import pytest

from conftest import UTC, make_query
from models.events import LookupOutcome
from services.availability import (
    check_availability,
    classify_response,
    fold_outcomes,
    overlaps,
)

FREE = {"errors": [], "busy": []}


def busy(start: str, end: str) -> dict:
    return {"errors": [], "busy": [{"start": start, "end": end}]}


class TestOverlaps:
    @pytest.mark.parametrize(
        "start_hm, end_hm, expected",
        [
            ((14, 30), (14, 45), True),  # inside
            ((13, 0), (14, 1), True),  # overlaps start
            ((14, 59), (16, 0), True),  # overlaps end
            ((13, 0), (16, 0), True),  # covers window
            ((13, 0), (14, 0), False),  # ends exactly at start
            ((15, 0), (16, 0), False),  # starts exactly at end
            ((10, 0), (11, 0), False),  # before
        ],
    )
    def test_half_open(self, window, start_hm, end_hm, expected):
        start = datetime(2025, 9, 25, *start_hm, tzinfo=UTC)
        end = datetime(2025, 9, 25, *end_hm, tzinfo=UTC)
        assert overlaps(window, start, end) is expected


class TestClassifyResponse:
    def test_free(self, window):
        assert classify_response("a@x.com", FREE, window).status == "available"

    def test_busy_interval_inside_window(self, window):
        response = busy("2025-09-25T14:30:00Z", "2025-09-25T14:45:00Z")
        assert classify_response("b@x.com", response, window).status == "busy"

    def test_touching_interval_is_available(self, window):
        response = {
            "errors": [],
            "busy": [
                {"start": "2025-09-25T13:00:00+00:00", "end": "2025-09-25T14:00:00+00:00"},
                {"start": "2025-09-25T15:00:00+00:00", "end": "2025-09-25T16:00:00+00:00"},
            ],
        }
        assert classify_response("a@x.com", response, window).status == "available"

    def test_offsets_are_compared_as_instants(self, window):
        # 17:30+03:00 == 14:30Z
        response = busy("2025-09-25T17:30:00+03:00", "2025-09-25T17:45:00+03:00")
        assert classify_response("a@x.com", response, window).status == "busy"

    def test_service_error_wins(self, window):
        response = {"errors": ["notFound"], "busy": [{"start": "2025-09-25T14:30:00Z", "end": "2025-09-25T14:45:00Z"}]}
        outcome = classify_response("c@x.com", response, window)
        assert outcome == LookupOutcome(user="c@x.com", status="error", reason="notFound")

    def test_naive_timestamp_rejected(self, window):
        with pytest.raises(ValueError):
            classify_response("a@x.com", busy("2025-09-25T14:30:00", "2025-09-25T14:45:00"), window)


class TestFoldOutcomes:
    def test_keeps_input_order_per_sequence(self):
        outcomes = [
            LookupOutcome("u1", "busy"),
            LookupOutcome("u2", "available"),
            LookupOutcome("u3", "error", "boom"),
            LookupOutcome("u4", "available"),
            LookupOutcome("u5", "busy"),
        ]
        result = fold_outcomes(outcomes)
        assert result.available == ["u2", "u4"]
        assert result.busy == ["u1", "u5"]
        assert result.errors == [{"user": "u3", "reason": "boom"}]


class TestCheckAvailability:
    @pytest.mark.asyncio
    async def test_end_to_end_example(self, window):
        query = make_query(
            {
                "a@x.com": FREE,
                "b@x.com": busy("2025-09-25T14:30:00Z", "2025-09-25T14:45:00Z"),
            }
        )
        result = await check_availability(["a@x.com", "b@x.com"], window, query=query)

        assert result.available == ["a@x.com"]
        assert result.busy == ["b@x.com"]
        assert result.errors == []
        assert result.totals_line() == "Checked: 2, Available: 1, Busy: 1, Errors: 0"

    @pytest.mark.asyncio
    async def test_failing_user_does_not_abort_batch(self, window):
        query = make_query(
            {"a@x.com": FREE, "c@x.com": FREE},
            failures={"b@x.com": ConnectionError("connection reset")},
        )
        result = await check_availability(["a@x.com", "b@x.com", "c@x.com"], window, query=query)

        assert result.available == ["a@x.com", "c@x.com"]
        assert result.errors == [{"user": "b@x.com", "reason": "connection reset"}]
        assert sorted(query.calls) == ["a@x.com", "b@x.com", "c@x.com"]

    @pytest.mark.asyncio
    async def test_malformed_response_becomes_error(self, window):
        query = make_query({"a@x.com": busy("not a date", "2025-09-25T14:45:00Z")})
        result = await check_availability(["a@x.com"], window, query=query)
        assert result.errors[0]["user"] == "a@x.com"
        assert result.errors[0]["reason"]

    @pytest.mark.asyncio
    async def test_timeout_becomes_error(self, window):
        async def slow_query(user, w):
            await asyncio.sleep(5)
            return FREE

        result = await check_availability(["a@x.com"], window, query=slow_query, timeout=0.01)
        assert result.available == []
        assert result.errors == [{"user": "a@x.com", "reason": "Free/busy query timed out after 0.01s"}]

    @pytest.mark.asyncio
    async def test_partition_of_input_users(self, window):
        users = [f"user{i}@x.com" for i in range(12)]
        responses = {}
        failures = {}
        for i, user in enumerate(users):
            if i % 3 == 0:
                responses[user] = FREE
            elif i % 3 == 1:
                responses[user] = busy(
                    (window.start + timedelta(minutes=i)).isoformat(),
                    (window.start + timedelta(minutes=i + 5)).isoformat(),
                )
            else:
                failures[user] = RuntimeError(f"failure {i}")

        result = await check_availability(users, window, query=make_query(responses, failures), max_concurrency=4)

        classified = result.available + result.busy + [e["user"] for e in result.errors]
        assert sorted(classified) == sorted(users)
        assert len(classified) == len(set(classified))
        assert result.total == len(users)
        assert result.available == users[0::3]
        assert result.busy == users[1::3]
        assert [e["user"] for e in result.errors] == users[2::3]

    @pytest.mark.asyncio
    async def test_order_restored_when_lookups_finish_out_of_order(self, window):
        delays = {"a@x.com": 0.05, "b@x.com": 0.0, "c@x.com": 0.02}

        async def query(user, w):
            await asyncio.sleep(delays[user])
            return FREE

        result = await check_availability(list(delays), window, query=query)
        assert result.available == ["a@x.com", "b@x.com", "c@x.com"]

    @pytest.mark.asyncio
    async def test_no_users(self, window):
        result = await check_availability([], window, query=make_query({}))
        assert result.total == 0
