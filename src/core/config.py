"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _split_list(value: str) -> list[str]:
    """Split a comma-separated env value, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("DB_PATH", PROJECT_ROOT / "data" / "db" / "availability.db"))
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# AVAILABILITY CONFIGURATION
# =============================================================================

# Calendars to check, e.g. "a@example.com,b@example.com"
AVAILABILITY_USERS = _split_list(os.environ.get("AVAILABILITY_USERS", ""))

# Zone the form's wall-clock date/time is interpreted in
AVAILABILITY_TIMEZONE = os.environ.get("AVAILABILITY_TIMEZONE", "UTC")

FREEBUSY_TIMEOUT_SECONDS = float(os.environ.get("FREEBUSY_TIMEOUT_SECONDS", "30"))
FREEBUSY_MAX_CONCURRENCY = int(os.environ.get("FREEBUSY_MAX_CONCURRENCY", "5"))

# =============================================================================
# FORM CONFIGURATION
# =============================================================================

FORM_FIELD_DATE = os.environ.get("FORM_FIELD_DATE", "Date")
FORM_FIELD_START_TIME = os.environ.get("FORM_FIELD_START_TIME", "Start Time")
FORM_FIELD_END_TIME = os.environ.get("FORM_FIELD_END_TIME", "End Time")

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

REPORT_PATH = Path(
    os.environ.get("AVAILABILITY_REPORT_PATH", OUTPUT_DIR / "availability_report.xlsx")
)
RESULTS_SHEET_NAME = os.environ.get("RESULTS_SHEET_NAME", "Results")

REPORT_HEADERS = ["STATUS", "USER", "NOTE"]
HEADER_ROW = 3  # Title on row 1, blank row 2

STATUS_LABELS = {
    "available": "✅ Available",
    "busy": "❌ Busy",
    "error": "⚠️ Error",
}
HEADER_FILL = "E8F0FE"
STATUS_FILLS = {
    "available": "E8F5E8",
    "busy": "FCE8E6",
    "error": "FFF2CC",
}
TITLE_FONT_SIZE = 12
MIN_COLUMN_WIDTH = 10
MAX_COLUMN_WIDTH = 80

# =============================================================================
# MS GRAPH CREDENTIALS (from environment)
# =============================================================================

GRAPH_TENANT_ID = os.environ.get("MICROSOFT_GRAPH_TENANT_ID", "")
GRAPH_APP_ID = os.environ.get("MICROSOFT_GRAPH_APP_ID", "")
GRAPH_CLIENT_SECRET = os.environ.get("MICROSOFT_GRAPH_CLIENT_SECRET", "")

# =============================================================================
# API CONFIGURATION
# =============================================================================

AVAILABILITY_API_KEY = os.environ.get("AVAILABILITY_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
