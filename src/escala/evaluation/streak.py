"""Consecutive-work streaks and the CLT weekly-rest alert."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from escala.scenario.contract.models import Absence, Roster, WorkerProfile

from .duty import is_on_duty

__all__ = [
    "MAX_CONSECUTIVE_WORK_DAYS",
    "STREAK_LOOKBACK_LIMIT",
    "WorkStreak",
    "ComplianceAlert",
    "consecutive_work_streak",
    "is_clt_violation",
    "compliance_alerts",
]

MAX_CONSECUTIVE_WORK_DAYS = 6
STREAK_LOOKBACK_LIMIT = 365


@dataclass(slots=True)
class WorkStreak:
    """Run of on-duty days ending on ``end``."""

    end: date
    dates: list[date] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.dates)

    @property
    def start(self) -> date | None:
        return self.dates[0] if self.dates else None


@dataclass(slots=True)
class ComplianceAlert:
    """Worker whose streak exceeds the consecutive-day limit."""

    worker_id: str
    worker_name: str
    day: date
    streak: int
    limit: int = MAX_CONSECUTIVE_WORK_DAYS
    streak_start: date | None = None

    def to_record(self) -> dict[str, object]:
        return {
            "record_type": "clt_alert",
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "day": self.day.isoformat(),
            "streak": self.streak,
            "limit": self.limit,
            "streak_start": self.streak_start.isoformat() if self.streak_start else None,
        }


def consecutive_work_streak(
    day: date,
    worker: WorkerProfile,
    absences: Iterable[Absence],
    *,
    limit: int = STREAK_LOOKBACK_LIMIT,
) -> WorkStreak:
    """Count on-duty days walking backwards from ``day``.

    The walk stops at the first day off (pattern off, absence or vacation), before the
    worker's start date, or once ``limit`` days have been counted. Dates are returned in
    chronological order.
    """
    absences = list(absences)
    streak = WorkStreak(end=day)
    if day < worker.cycle_start_date:
        return streak
    collected: list[date] = []
    current = day
    while current >= worker.cycle_start_date and len(collected) < limit:
        if not is_on_duty(current, worker, absences):
            break
        collected.append(current)
        current -= timedelta(days=1)
    streak.dates = collected[::-1]
    return streak


def is_clt_violation(streak: WorkStreak | int, limit: int = MAX_CONSECUTIVE_WORK_DAYS) -> bool:
    count = streak if isinstance(streak, int) else streak.count
    return count > limit


def compliance_alerts(
    roster: Roster,
    day: date,
    *,
    limit: int = MAX_CONSECUTIVE_WORK_DAYS,
    worker_ids: Sequence[str] | None = None,
) -> list[ComplianceAlert]:
    """Return an alert for every active worker whose streak ending on ``day`` exceeds ``limit``."""
    alerts: list[ComplianceAlert] = []
    for worker in roster.active_workers():
        if worker_ids is not None and worker.id not in worker_ids:
            continue
        streak = consecutive_work_streak(day, worker, roster.absences_for(worker.id))
        if is_clt_violation(streak, limit):
            alerts.append(
                ComplianceAlert(
                    worker_id=worker.id,
                    worker_name=worker.name,
                    day=day,
                    streak=streak.count,
                    limit=limit,
                    streak_start=streak.start,
                )
            )
    return alerts
