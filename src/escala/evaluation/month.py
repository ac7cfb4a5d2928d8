"""Per-worker month summaries and calendar grids."""

from __future__ import annotations

import calendar
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date

import pandas as pd

from escala.core.errors import EscalaValueError
from escala.reference.holidays import holiday_for
from escala.scenario.contract.models import Absence, WorkerProfile
from escala.scheduling.timeline.calendar import is_work_day, iter_days, weekday_ordinal
from escala.scheduling.timeline.resolver import resolve_effective_config

from .duty import day_status, is_absent, is_on_duty, is_on_vacation, is_overtime

__all__ = [
    "MONTH_GRID_COLUMNS",
    "MonthSummary",
    "parse_month",
    "month_bounds",
    "month_summary",
    "month_dataframe",
    "round_half_up",
]

MONTH_GRID_COLUMNS = [
    "date",
    "weekday",
    "status",
    "work_day",
    "overtime",
    "vacation",
    "absence",
    "on_duty",
    "holiday",
    "shift_pattern",
    "role",
    "turn",
]

_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_month(text: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into ``(year, month)``."""
    match = _MONTH_RE.match(text.strip())
    if not match:
        raise EscalaValueError(f"Month must be in YYYY-MM format (got '{text}')")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise EscalaValueError(f"Month out of range in '{text}'")
    if not MINYEAR <= year <= MAXYEAR:
        raise EscalaValueError(f"Year out of range in '{text}'")
    return year, month


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


@dataclass(slots=True)
class MonthSummary:
    """Work/presence figures of one worker for one calendar month.

    Attributes
    ----------
    work_days:
        Pattern work days plus overtime days in the month.
    absences:
        Absences recorded for the worker within the month.
    presence_rate:
        ``(work_days - absences) / work_days`` as a rounded percentage; 100 when the month
        has no work days.
    """

    worker_id: str
    year: int
    month: int
    work_days: int
    absences: int
    vacation_days: int
    overtime_days: int
    presence_rate: int


def month_summary(
    worker: WorkerProfile, absences: Iterable[Absence], year: int, month: int
) -> MonthSummary:
    first, last = month_bounds(year, month)
    worker_absences = [a for a in absences if a.profile_id == worker.id]
    work_days = 0
    vacation_days = 0
    overtime_days = 0
    for day in iter_days(first, last):
        overtime = is_overtime(day, worker)
        if is_work_day(day, worker) or overtime:
            work_days += 1
        if overtime:
            overtime_days += 1
        if is_on_vacation(day, worker):
            vacation_days += 1
    absence_count = sum(1 for a in worker_absences if first <= a.date <= last)
    if work_days > 0:
        presence = round_half_up((work_days - absence_count) / work_days * 100)
    else:
        presence = 100
    return MonthSummary(
        worker_id=worker.id,
        year=year,
        month=month,
        work_days=work_days,
        absences=absence_count,
        vacation_days=vacation_days,
        overtime_days=overtime_days,
        presence_rate=presence,
    )


def month_dataframe(
    worker: WorkerProfile, absences: Iterable[Absence], year: int, month: int
) -> pd.DataFrame:
    """Return one row per day of the month describing the worker's calendar."""
    first, last = month_bounds(year, month)
    worker_absences = [a for a in absences if a.profile_id == worker.id]
    rows = []
    for day in iter_days(first, last):
        effective = resolve_effective_config(day, worker)
        holiday = holiday_for(day, worker.state)
        pattern = effective.shift_pattern
        rows.append(
            {
                "date": day.isoformat(),
                "weekday": weekday_ordinal(day),
                "status": day_status(day, worker, worker_absences),
                "work_day": is_work_day(day, worker),
                "overtime": is_overtime(day, worker),
                "vacation": is_on_vacation(day, worker),
                "absence": is_absent(day, worker, worker_absences),
                "on_duty": is_on_duty(day, worker, worker_absences),
                "holiday": holiday.name if holiday else None,
                "shift_pattern": getattr(pattern, "value", pattern),
                "role": effective.role,
                "turn": effective.turn.value if effective.turn else None,
            }
        )
    return pd.DataFrame(rows).reindex(columns=MONTH_GRID_COLUMNS)
