from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_day(value: str) -> date:
    """Calendar day of a bare YYYY-MM-DD date or of a full ISO timestamp.

    Anything else raises ValueError, including a date followed by garbage.
    """
    value = value.strip()
    if len(value) == 10:
        return parse_iso_date(value)
    if len(value) < 11 or value[10] not in "T ":
        raise ValueError(f"Not an ISO date: {value!r}")
    # fromisoformat only understands the "Z" suffix from Python 3.11 on.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).date()


def parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    """Query-string date: empty means no bound, garbage is a 400."""
    if not value:
        return None
    try:
        return parse_iso_day(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def format_display_date(value: Optional[date]) -> str:
    """Day/month/year as printed in the exported workbook."""
    if value is None:
        return "All"
    return value.strftime("%d/%m/%Y")


def today_local() -> date:
    return now_local().date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def check_date_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and start > end:
        raise ValidationError("startDate must not be after endDate")
