"""
Availability report generation in Excel format.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from core.config import (
    HEADER_FILL,
    HEADER_ROW,
    MAX_COLUMN_WIDTH,
    MIN_COLUMN_WIDTH,
    REPORT_HEADERS,
    REPORT_PATH,
    RESULTS_SHEET_NAME,
    STATUS_FILLS,
    STATUS_LABELS,
    TITLE_FONT_SIZE,
)
from models.events import ClassificationResult, TimeWindow

# Serializes report writes within the process
_report_lock = threading.Lock()


class ReportWriteError(RuntimeError):
    """The report workbook could not be opened or saved."""


def format_datetime_display(dt: datetime) -> str:
    """Format as 'M/D/YYYY H:MM:SS AM' (platform-safe, no zero-padding)."""
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt.month}/{dt.day}/{dt.year} {hour}:{dt.minute:02d}:{dt.second:02d} {meridiem}"


def format_report_title(window: TimeWindow) -> str:
    return (
        f"Availability check: {format_datetime_display(window.start)} "
        f"to {format_datetime_display(window.end)}"
    )


def get_or_create_sheet(wb: Workbook, sheet_name: str) -> Worksheet:
    """
    Return an empty sheet named sheet_name.

    An existing sheet is replaced at the same position so that values,
    styles and column widths from earlier runs are all discarded.
    """
    if sheet_name in wb.sheetnames:
        index = wb.sheetnames.index(sheet_name)
        wb.remove(wb[sheet_name])
        return wb.create_sheet(title=sheet_name, index=index)
    return wb.create_sheet(title=sheet_name)


@contextmanager
def open_report_sheet(path: Path, sheet_name: str) -> Iterator[Worksheet]:
    """
    Acquire-or-create the report sheet for one exclusive write.

    The workbook is saved when the block exits without error; other sheets
    in an existing workbook are left untouched.
    """
    with _report_lock:
        try:
            if path.exists():
                wb = load_workbook(path)
            else:
                wb = Workbook()
                # Drop the default empty sheet
                wb.remove(wb.active)
        except Exception as e:
            raise ReportWriteError(f"Cannot open report workbook {path}: {e}") from e

        ws = get_or_create_sheet(wb, sheet_name)
        yield ws

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(str(path))
        except Exception as e:
            raise ReportWriteError(f"Cannot save report workbook {path}: {e}") from e


def _write_row(ws: Worksheet, row: int, values: list[str], fill: str | None = None, bold: bool = False):
    for col_idx, value in enumerate(values, start=1):
        cell = ws.cell(row=row, column=col_idx, value=value)
        if fill:
            cell.fill = PatternFill(start_color=fill, end_color=fill, fill_type="solid")
        if bold:
            cell.font = Font(bold=True)


def autofit_columns(ws: Worksheet, first_row: int, last_row: int, num_cols: int):
    """Size columns to the longest value between first_row and last_row."""
    for col_idx in range(1, num_cols + 1):
        longest = 0
        for row in range(first_row, last_row + 1):
            value = ws.cell(row=row, column=col_idx).value
            if value is not None:
                longest = max(longest, len(str(value)))
        width = min(max(longest + 2, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH)
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def write_results_sheet(ws: Worksheet, result: ClassificationResult, window: TimeWindow):
    """
    Write the availability table to a worksheet.

    Layout:
    Row 1: Title (bold) with the checked window
    Row 3: STATUS | USER | NOTE header
    Row 4+: Available users (green), busy users (red), errors (yellow, reason in NOTE)
    Then a blank row and the TOTALS block
    """
    title = ws.cell(row=1, column=1, value=format_report_title(window))
    title.font = Font(bold=True, size=TITLE_FONT_SIZE)

    _write_row(ws, HEADER_ROW, REPORT_HEADERS, fill=HEADER_FILL, bold=True)

    rows: list[tuple[str, list[str]]] = []
    rows.extend(("available", [STATUS_LABELS["available"], user, ""]) for user in result.available)
    rows.extend(("busy", [STATUS_LABELS["busy"], user, ""]) for user in result.busy)
    rows.extend(
        ("error", [STATUS_LABELS["error"], err["user"], err["reason"]]) for err in result.errors
    )

    row = HEADER_ROW + 1
    for status, values in rows:
        _write_row(ws, row, values, fill=STATUS_FILLS[status])
        row += 1
    last_table_row = row - 1

    # Totals after one blank row
    row += 1
    ws.cell(row=row, column=1, value="TOTALS:").font = Font(bold=True)
    ws.cell(row=row + 1, column=1, value=result.totals_line())

    autofit_columns(ws, HEADER_ROW, last_table_row, len(REPORT_HEADERS))


def write_availability_report(
    result: ClassificationResult,
    window: TimeWindow,
    path: Path = REPORT_PATH,
    sheet_name: str = RESULTS_SHEET_NAME,
) -> Path:
    """Clear and rebuild the results sheet of the report workbook."""
    with open_report_sheet(path, sheet_name) as ws:
        write_results_sheet(ws, result, window)
    print(f"Saved availability report to: {path} [{sheet_name}]")
    return path
