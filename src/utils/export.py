"""Spreadsheet export of tabular results."""

import io
import logging
from enum import Enum
from typing import Any, Iterable, List, Mapping, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font

logger = logging.getLogger(__name__)

# (row key, column header)
REPORT_COLUMNS: List[Tuple[str, str]] = [
    ("id", "Report ID"),
    ("faculty_name", "Faculty"),
    ("class_name", "Class"),
    ("week", "Week"),
    ("lecture_date", "Lecture Date"),
    ("course_name", "Course"),
    ("course_code", "Course Code"),
    ("lecturer_name", "Lecturer"),
    ("students_present", "Students Present"),
    ("total_students", "Total Students"),
    ("venue", "Venue"),
    ("scheduled_time", "Scheduled Time"),
    ("topic_taught", "Topic Taught"),
    ("learning_outcomes", "Learning Outcomes"),
    ("recommendations", "Recommendations"),
    ("prl_feedback", "PRL Feedback"),
    ("created_at", "Created At"),
]

RATING_COLUMNS: List[Tuple[str, str]] = [
    ("id", "Rating ID"),
    ("report_id", "Report ID"),
    ("type", "Type"),
    ("rating", "Rating"),
    ("comments", "Comments"),
    ("timestamp", "Submitted At"),
]


def _cell_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def rows_to_xlsx(
    rows: Iterable[Mapping[str, Any]],
    columns: Sequence[Tuple[str, str]],
    sheet_title: str = "Sheet1",
) -> bytes:
    """Render rows into an .xlsx workbook.

    Args:
        rows: Records to write, one spreadsheet row each.
        columns: (key, header) pairs selecting and ordering the columns.
        sheet_title: Worksheet title.

    Returns:
        The workbook as bytes.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title

    ws.append([header for _, header in columns])
    for cell in ws[1]:
        cell.font = Font(bold=True)

    count = 0
    for row in rows:
        ws.append([_cell_value(row.get(key)) for key, _ in columns])
        count += 1

    buffer = io.BytesIO()
    wb.save(buffer)
    logger.info("Exported %d rows to sheet '%s'", count, sheet_title)
    return buffer.getvalue()
