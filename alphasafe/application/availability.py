"""Availability evaluator — can a technician be assigned on a given day?

Pure functions over anything shaped like a Technician (ORM row, read schema
or a plain object). All comparisons are by calendar day in the configured
timezone; malformed values make the affected rule not apply.
"""

from datetime import date, datetime
from typing import Any, Optional

import pytz

from alphasafe.config import get_settings
from alphasafe.domain.enums import TechnicianStatus, coerce_enum


def _timezone(tz):
    if tz is None:
        return pytz.timezone(get_settings().TIMEZONE)
    if isinstance(tz, str):
        return pytz.timezone(tz)
    return tz


def today(tz=None) -> date:
    return datetime.now(_timezone(tz)).date()


def to_day(value: Any, tz=None) -> Optional[date]:
    """Normalize a date, datetime or ISO string to a calendar day.

    Aware datetimes are converted to the local timezone first. Anything that
    cannot be read as a date gives None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(_timezone(tz))
        return value.date()
    if isinstance(value, date):
        return value
    return None


def _status(technician) -> Optional[TechnicianStatus]:
    try:
        return coerce_enum(TechnicianStatus, getattr(technician, "active", None))
    except ValueError:
        return None


def _within(day: date, start: Any, end: Any, tz) -> bool:
    start_day = to_day(start, tz)
    end_day = to_day(end, tz)
    if start_day is None or end_day is None:
        return False
    return start_day <= day <= end_day


def unavailability_reason(technician, target_date: Any = None, tz=None) -> Optional[str]:
    """Return the status keeping the technician off the given day, or None."""
    day = to_day(target_date, tz) if target_date is not None else today(tz)
    if day is None:
        day = today(tz)

    status = _status(technician)

    if status == TechnicianStatus.INACTIVE:
        raw_termination = getattr(technician, "termination_date", None)
        if raw_termination is None:
            return status.value
        termination_day = to_day(raw_termination, tz)
        # Unreadable termination date: rule does not apply
        if termination_day is not None and day >= termination_day:
            return status.value
        return None

    if status == TechnicianStatus.VACATION:
        if _within(day, getattr(technician, "vacation_start", None), getattr(technician, "vacation_end", None), tz):
            return status.value
        return None

    if status == TechnicianStatus.SICK_LEAVE:
        if _within(day, getattr(technician, "sick_leave_start", None), getattr(technician, "sick_leave_end", None), tz):
            return status.value
        return None

    return None


def is_available(technician, target_date: Any = None, tz=None) -> bool:
    return unavailability_reason(technician, target_date, tz) is None
