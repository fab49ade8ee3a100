"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.events import ClassificationResult, TimeWindow  # noqa: E402

UTC = ZoneInfo("UTC")


def make_query(responses: dict, failures: dict | None = None):
    """
    Build a fake free/busy query.

    responses maps user -> FreeBusyResponse; failures maps user -> exception
    to raise. Every call is recorded on query.calls.
    """
    failures = failures or {}

    async def query(user, window):
        query.calls.append(user)
        if user in failures:
            raise failures[user]
        return responses[user]

    query.calls = []
    return query


@pytest.fixture
def window():
    """2025-09-25 14:00-15:00 UTC."""
    return TimeWindow(
        start=datetime(2025, 9, 25, 14, 0, 0, tzinfo=UTC),
        end=datetime(2025, 9, 25, 15, 0, 0, tzinfo=UTC),
    )


@pytest.fixture
def named_values():
    """Form submission payload keyed by field label."""
    return {
        "Timestamp": ["9/20/2025 10:11:12"],
        "Date": ["9/25/2025"],
        "Start Time": ["2:00:00 PM"],
        "End Time": ["3:00:00 PM"],
    }


@pytest.fixture
def sample_result():
    """One user of each classification."""
    return ClassificationResult(
        available=["a@x.com"],
        busy=["b@x.com"],
        errors=[{"user": "c@x.com", "reason": "notFound"}],
    )


@pytest.fixture
def report_path(tmp_path):
    return tmp_path / "reports" / "availability_report.xlsx"
