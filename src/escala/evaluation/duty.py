"""Overlay the vacation/overtime/absence sets on top of the work-day predicate."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from escala.scenario.contract.models import Absence, WorkerProfile
from escala.scheduling.timeline.calendar import is_work_day, parse_calendar_date

__all__ = [
    "absence_dates",
    "is_absent",
    "is_on_vacation",
    "is_overtime",
    "is_on_duty",
    "day_status",
]


def absence_dates(absences: Iterable[Absence], worker_id: str) -> set[date]:
    """Return the days on which ``worker_id`` has an absence recorded."""
    return {a.date for a in absences if a.profile_id == worker_id}


def _after_start(day: date, worker: WorkerProfile) -> bool:
    # Overlays use the hire date, not the regime anchor.
    return day >= worker.cycle_start_date


def is_absent(day: date, worker: WorkerProfile, absences: Iterable[Absence]) -> bool:
    if not _after_start(day, worker):
        return False
    return any(a.date == day and a.profile_id == worker.id for a in absences)


def is_on_vacation(day: date, worker: WorkerProfile) -> bool:
    return _after_start(day, worker) and day in worker.vacation_dates


def is_overtime(day: date, worker: WorkerProfile) -> bool:
    return _after_start(day, worker) and day in worker.overtime_dates


def is_on_duty(value: object, worker: WorkerProfile, absences: Iterable[Absence]) -> bool:
    """Return whether ``worker`` actually works on ``value``.

    A worker is on duty when the day is a pattern work day or a booked overtime day, and
    the day is neither an absence nor a vacation day. Invalid dates evaluate to ``False``.
    """
    day = parse_calendar_date(value)
    if day is None:
        return False
    if not (is_work_day(day, worker) or is_overtime(day, worker)):
        return False
    return not is_absent(day, worker, absences) and not is_on_vacation(day, worker)


def day_status(day: date, worker: WorkerProfile, absences: Iterable[Absence]) -> str:
    """Single label for calendar cells: vacation, absence, overtime, work, off or inactive."""
    if day < worker.cycle_start_date:
        return "inactive"
    if is_on_vacation(day, worker):
        return "vacation"
    if is_absent(day, worker, absences):
        return "absence"
    if is_overtime(day, worker):
        return "overtime"
    if is_work_day(day, worker):
        return "work"
    return "off"
