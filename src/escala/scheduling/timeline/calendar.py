"""Work-day predicate for shift patterns."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime, timedelta

import pandas as pd

from .models import ShiftPattern, WorkerConfig
from .resolver import EffectiveConfig, resolve_effective_config

__all__ = [
    "DEFAULT_ROTATING_WORK_DAYS",
    "DEFAULT_ROTATING_OFF_DAYS",
    "parse_calendar_date",
    "weekday_ordinal",
    "calendar_day_difference",
    "evaluate_pattern",
    "is_work_day",
    "iter_days",
    "iter_work_days",
]

DEFAULT_ROTATING_WORK_DAYS = 5
DEFAULT_ROTATING_OFF_DAYS = 1


def parse_calendar_date(value: object) -> date | None:
    """Coerce ``value`` into a naive calendar date, returning ``None`` when it is not one.

    Accepts ``date``, ``datetime``/``pd.Timestamp`` (time of day dropped) and ISO strings.
    ``None``, ``NaT``, ``NaN``, malformed strings and other types yield ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if pd.isna(value):
            return None
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None


def weekday_ordinal(day: date) -> int:
    """Return the weekday with 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def calendar_day_difference(later: date, earlier: date) -> int:
    """Whole calendar days between two naive dates (no elapsed-time arithmetic)."""
    return (later - earlier).days


def evaluate_pattern(day: date, effective: EffectiveConfig) -> bool:
    """Apply the pattern rule of ``effective`` to ``day`` (assumed on/after the cycle start)."""
    weekday = weekday_ordinal(day)
    pattern = effective.shift_pattern

    if pattern == ShiftPattern.FIXED_FIVE_TWO:
        return 1 <= weekday <= 5
    if pattern == ShiftPattern.FIXED_SIX_ONE:
        return 1 <= weekday <= 6
    if pattern == ShiftPattern.TWELVE_THIRTY_SIX:
        return calendar_day_difference(day, effective.cycle_start_date) % 2 == 0
    if pattern == ShiftPattern.ROTATING:
        work = effective.rotating_work_days or DEFAULT_ROTATING_WORK_DAYS
        off = effective.rotating_off_days or DEFAULT_ROTATING_OFF_DAYS
        cycle = work + off
        # Python's modulo is non-negative for a positive divisor.
        position = calendar_day_difference(day, effective.cycle_start_date) % cycle
        return position < work
    if pattern == ShiftPattern.FLEXIBLE:
        return weekday not in effective.fixed_off_weekdays
    # TODO: decide with the compliance owners whether unknown patterns should fail closed.
    return True


def is_work_day(value: object, config: WorkerConfig) -> bool:
    """Return whether the worker described by ``config`` is scheduled on ``value``.

    Parameters
    ----------
    value:
        Day to evaluate (``date``, ``datetime`` or ISO string). Anything that is not a valid
        calendar date evaluates to ``False`` instead of raising.
    config:
        Worker configuration, including its career timeline.

    Returns
    -------
    bool
        ``False`` before the hire date or the effective cycle start; otherwise the
        verdict of the pattern in force on that day.
    """
    day = parse_calendar_date(value)
    if day is None:
        return False
    effective = resolve_effective_config(day, config)
    if day < config.cycle_start_date or day < effective.cycle_start_date:
        return False
    return evaluate_pattern(day, effective)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        if current == end:
            break
        current += timedelta(days=1)


def iter_work_days(start: date, end: date, config: WorkerConfig) -> Iterator[date]:
    """Yield the work days of ``config`` between ``start`` and ``end`` inclusive."""
    for day in iter_days(start, end):
        if is_work_day(day, config):
            yield day
