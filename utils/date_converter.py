"""
Date Conversion Utility

Converts dates between the format shown on the vendor support page
(e.g., "2023/1/5"), the format used in notification messages
(e.g., "2023/01/05") and the ISO format stored in snapshot files
(e.g., "2023-01-05").
"""

from datetime import date, datetime

from dateutil import parser

LISTING_DATE_FORMAT = '%Y/%m/%d'


def parse_listing_date(date_str):
    """
    Parse a date as printed in the listing table.

    Args:
        date_str (str): Date in YYYY/M/D format, zero padding optional

    Returns:
        datetime.date: Parsed calendar date

    Raises:
        ValueError: If date_str is not in YYYY/M/D format
    """
    try:
        return datetime.strptime(date_str.strip(), LISTING_DATE_FORMAT).date()
    except ValueError as e:
        raise ValueError(f"Invalid listing date '{date_str}'. Expected YYYY/M/D") from e


def format_listing_date(value):
    """Format a date as YYYY/MM/DD for notification messages."""
    return value.strftime(LISTING_DATE_FORMAT)


def to_iso(value):
    """Format a date as YYYY-MM-DD for snapshot files."""
    return value.isoformat()


def from_iso(date_str):
    """
    Parse a date stored in a snapshot file.

    Accepts plain ISO dates ("2023-01-05") as well as full timestamps
    ("2023-01-05T00:00:00Z") written by older versions of the tool.
    Only the calendar date is kept.

    Args:
        date_str (str): ISO date or timestamp

    Returns:
        datetime.date: Parsed calendar date

    Raises:
        ValueError: If date_str cannot be parsed
    """
    if isinstance(date_str, date) and not isinstance(date_str, datetime):
        return date_str
    if not isinstance(date_str, str):
        raise ValueError(f"Invalid snapshot date {date_str!r}")
    try:
        return parser.isoparse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid snapshot date '{date_str}'") from e
