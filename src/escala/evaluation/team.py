"""Team-level views: who is on duty on a day, grouped by turn and role."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

import pandas as pd

from escala.scenario.contract.models import Roster, WorkerProfile
from escala.scheduling.timeline.models import WorkTurn
from escala.scheduling.timeline.resolver import resolve_effective_config

from .duty import is_on_duty
from .month import month_bounds, round_half_up

__all__ = [
    "UNASSIGNED",
    "GroupCoverage",
    "TeamCoverage",
    "who_works_on",
    "workers_by_turn",
    "team_coverage",
    "team_month_dataframe",
]

UNASSIGNED = "unassigned"


@dataclass(slots=True)
class GroupCoverage:
    active: int = 0
    total: int = 0
    worker_ids: list[str] = field(default_factory=list)


@dataclass(slots=True)
class TeamCoverage:
    """Coverage snapshot for one day."""

    day: date
    by_turn: dict[str, GroupCoverage]
    by_role: dict[str, GroupCoverage]
    total_active: int
    total_team: int

    @property
    def global_percent(self) -> int:
        if self.total_team == 0:
            return 0
        return round_half_up(self.total_active / self.total_team * 100)


def who_works_on(day: date, roster: Roster) -> list[WorkerProfile]:
    """Active workers on duty on ``day`` (pattern or overtime, minus absences and vacations)."""
    return [
        worker
        for worker in roster.active_workers()
        if is_on_duty(day, worker, roster.absences_for(worker.id))
    ]


def workers_by_turn(day: date, roster: Roster) -> dict[str, list[WorkerProfile]]:
    grouped: dict[str, list[WorkerProfile]] = {turn.value: [] for turn in WorkTurn}
    for worker in who_works_on(day, roster):
        turn = resolve_effective_config(day, worker).turn
        grouped.setdefault(turn.value if turn else UNASSIGNED, []).append(worker)
    return grouped


def team_coverage(day: date, roster: Roster) -> TeamCoverage:
    """Count on-duty workers per effective turn and role on ``day``."""
    working = {worker.id for worker in who_works_on(day, roster)}
    by_turn: dict[str, GroupCoverage] = {turn.value: GroupCoverage() for turn in WorkTurn}
    by_role: dict[str, GroupCoverage] = {}
    team = roster.active_workers()
    for worker in team:
        effective = resolve_effective_config(day, worker)
        turn_key = effective.turn.value if effective.turn else UNASSIGNED
        role_key = effective.role or UNASSIGNED
        for bucket in (
            by_turn.setdefault(turn_key, GroupCoverage()),
            by_role.setdefault(role_key, GroupCoverage()),
        ):
            bucket.total += 1
            if worker.id in working:
                bucket.active += 1
                bucket.worker_ids.append(worker.id)
    return TeamCoverage(
        day=day,
        by_turn=by_turn,
        by_role=by_role,
        total_active=len(working),
        total_team=len(team),
    )


def team_month_dataframe(roster: Roster, year: int, month: int) -> pd.DataFrame:
    """Wide on-duty grid: one row per active worker, one boolean column per day."""
    first, last = month_bounds(year, month)
    days = pd.date_range(first, last, freq="D")
    rows = []
    for worker in roster.active_workers():
        absences = roster.absences_for(worker.id)
        row: dict[str, object] = {"worker_id": worker.id, "name": worker.name}
        for stamp in days:
            row[stamp.date().isoformat()] = is_on_duty(stamp.date(), worker, absences)
        rows.append(row)
    columns = ["worker_id", "name", *[stamp.date().isoformat() for stamp in days]]
    return pd.DataFrame(rows, columns=columns)
