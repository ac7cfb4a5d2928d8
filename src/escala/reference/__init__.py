"""Reference datasets (holiday calendars)."""

from .holidays import (
    BRAZIL_STATES,
    Holiday,
    HolidayCalendar,
    holiday_for,
    holidays_between,
    load_holiday_calendar,
)

__all__ = [
    "BRAZIL_STATES",
    "Holiday",
    "HolidayCalendar",
    "holiday_for",
    "holidays_between",
    "load_holiday_calendar",
]
