"""Vacation planning: request checks, booking, removal, overtime toggles, period grouping."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from escala.core.errors import EscalaValueError
from escala.scenario.contract.models import Roster, WorkerProfile
from escala.scheduling.timeline.calendar import is_work_day, iter_days, parse_calendar_date
from escala.scheduling.timeline.resolver import resolve_effective_config

from .duty import absence_dates

__all__ = [
    "DEFAULT_VACATION_DAYS",
    "SUGGESTION_LOOKAHEAD_DAYS",
    "PeerConflict",
    "VacationCheck",
    "VacationPeriod",
    "check_vacation_request",
    "book_vacation",
    "remove_vacation_period",
    "toggle_overtime",
    "suggest_vacation_start",
    "vacation_periods",
]

DEFAULT_VACATION_DAYS = 10
SUGGESTION_LOOKAHEAD_DAYS = 7


@dataclass(slots=True)
class PeerConflict:
    worker_id: str
    name: str
    dates: list[date]


@dataclass(slots=True)
class VacationCheck:
    """Outcome of validating a vacation request.

    ``blocked`` reflects personal conflicts only; peer conflicts are informational.
    """

    worker_id: str
    start: date | None
    days: int
    dates: list[date] = field(default_factory=list)
    starts_on_work_day: bool = False
    overlapping_vacation: list[date] = field(default_factory=list)
    overlapping_absences: list[date] = field(default_factory=list)
    peer_conflicts: list[PeerConflict] = field(default_factory=list)

    @property
    def end(self) -> date | None:
        return self.dates[-1] if self.dates else None

    @property
    def blocked(self) -> bool:
        return (
            not self.starts_on_work_day
            or bool(self.overlapping_vacation)
            or bool(self.overlapping_absences)
        )

    def reasons(self) -> list[str]:
        messages: list[str] = []
        if self.start is None:
            messages.append("start date is not a valid calendar date")
        elif not self.starts_on_work_day:
            messages.append(f"{self.start} is not a work day")
        if self.overlapping_vacation:
            messages.append(
                "overlaps existing vacation: " + ", ".join(d.isoformat() for d in self.overlapping_vacation)
            )
        if self.overlapping_absences:
            messages.append(
                "overlaps absences: " + ", ".join(d.isoformat() for d in self.overlapping_absences)
            )
        return messages


@dataclass(slots=True, frozen=True)
class VacationPeriod:
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def _period_dates(start: date, days: int) -> list[date]:
    if days < 1:
        raise EscalaValueError(f"Vacation length must be >= 1 day (got {days})")
    return list(iter_days(start, start + timedelta(days=days - 1)))


def check_vacation_request(
    worker: WorkerProfile,
    roster: Roster,
    start: object,
    days: int = DEFAULT_VACATION_DAYS,
) -> VacationCheck:
    """Validate a vacation of ``days`` consecutive days starting on ``start``.

    The request is blocked when the start is not a work day for ``worker`` or when the
    period overlaps an existing vacation or one of the worker's absences. Active workers
    sharing the worker's role on the start date and holding vacation inside the period are
    reported as peer conflicts.
    """
    start_day = parse_calendar_date(start)
    check = VacationCheck(worker_id=worker.id, start=start_day, days=days)
    if start_day is None:
        return check
    check.dates = _period_dates(start_day, days)
    check.starts_on_work_day = is_work_day(start_day, worker)
    check.overlapping_vacation = [d for d in check.dates if d in worker.vacation_dates]
    own_absences = absence_dates(roster.absences, worker.id)
    check.overlapping_absences = [d for d in check.dates if d in own_absences]

    role = resolve_effective_config(start_day, worker).role
    for peer in roster.active_workers():
        if peer.id == worker.id:
            continue
        if resolve_effective_config(start_day, peer).role != role:
            continue
        shared = [d for d in check.dates if d in peer.vacation_dates]
        if shared:
            check.peer_conflicts.append(PeerConflict(worker_id=peer.id, name=peer.name, dates=shared))
    return check


def book_vacation(
    worker: WorkerProfile,
    roster: Roster,
    start: object,
    days: int = DEFAULT_VACATION_DAYS,
) -> WorkerProfile:
    """Return a copy of ``worker`` with the requested period merged into its vacations.

    Raises
    ------
    EscalaValueError
        When the request is blocked by a personal conflict.
    """
    check = check_vacation_request(worker, roster, start, days)
    if check.blocked:
        raise EscalaValueError(
            f"Vacation for worker '{worker.id}' rejected: " + "; ".join(check.reasons())
        )
    merged = set(worker.vacation_dates) | set(check.dates)
    return worker.model_copy(update={"vacation_dates": merged})


def remove_vacation_period(worker: WorkerProfile, day: date) -> WorkerProfile:
    """Drop the contiguous vacation period containing ``day`` (and overtime booked inside it)."""
    if day not in worker.vacation_dates:
        return worker
    period = {day}
    cursor = day + timedelta(days=1)
    while cursor in worker.vacation_dates:
        period.add(cursor)
        cursor += timedelta(days=1)
    cursor = day - timedelta(days=1)
    while cursor in worker.vacation_dates:
        period.add(cursor)
        cursor -= timedelta(days=1)
    return worker.model_copy(
        update={
            "vacation_dates": set(worker.vacation_dates) - period,
            "overtime_dates": set(worker.overtime_dates) - period,
        }
    )


def toggle_overtime(worker: WorkerProfile, day: date) -> WorkerProfile:
    overtime = set(worker.overtime_dates)
    if day in overtime:
        overtime.discard(day)
    else:
        overtime.add(day)
    return worker.model_copy(update={"overtime_dates": overtime})


def suggest_vacation_start(
    worker: WorkerProfile, day: date, lookahead: int = SUGGESTION_LOOKAHEAD_DAYS
) -> date:
    """Return ``day`` if it is a work day, else the first work day within ``lookahead`` days."""
    if is_work_day(day, worker):
        return day
    for offset in range(1, lookahead + 1):
        candidate = day + timedelta(days=offset)
        if is_work_day(candidate, worker):
            return candidate
    return day


def vacation_periods(
    dates: Iterable[date], *, start: date | None = None, end: date | None = None
) -> list[VacationPeriod]:
    """Group vacation days into contiguous periods.

    When ``start``/``end`` are given only periods intersecting that window are returned.
    """
    ordered = sorted(set(dates))
    periods: list[VacationPeriod] = []
    if not ordered:
        return periods
    run_start = previous = ordered[0]
    for current in ordered[1:]:
        if (current - previous).days == 1:
            previous = current
            continue
        periods.append(VacationPeriod(run_start, previous))
        run_start = previous = current
    periods.append(VacationPeriod(run_start, previous))
    if start is not None:
        periods = [p for p in periods if p.end >= start]
    if end is not None:
        periods = [p for p in periods if p.start <= end]
    return periods
