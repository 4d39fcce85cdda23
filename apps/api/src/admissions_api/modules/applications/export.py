"""
CSV export of admission applications.

Every field, header included, is quoted and embedded quotes are doubled,
so the output opens cleanly in spreadsheet software.
"""

import csv
import io
from collections.abc import Iterable
from datetime import datetime

from admissions_api.modules.applications.models import Application
from admissions_api.modules.shared import ensure_utc

EXPORT_FILENAME = "applications.csv"
EXPORT_MEDIA_TYPE = "text/csv"

# (CSV column, model attribute)
EXPORT_COLUMNS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("studentName", "student_name"),
    ("dob", "date_of_birth"),
    ("classApplying", "class_applying"),
    ("parentName", "parent_name"),
    ("parentPhone", "parent_phone"),
    ("parentEmail", "parent_email"),
    ("address", "address"),
    ("message", "message"),
    ("createdAt", "created_at"),
)


def _format_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()
    return str(value)


def applications_to_csv(applications: Iterable[Application]) -> str:
    """
    Serialize applications to CSV text.

    Args:
        applications: Records to export, in output order

    Returns:
        The CSV document; only the header line when there are no records
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

    writer.writerow([column for column, _ in EXPORT_COLUMNS])
    for application in applications:
        writer.writerow(
            [_format_value(getattr(application, attribute, None)) for _, attribute in EXPORT_COLUMNS]
        )

    return buffer.getvalue()
