"""Pydantic models describing a team roster (workers, overlays, absences)."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from escala.core.errors import EscalaValueError
from escala.reference.holidays import BRAZIL_STATES
from escala.scheduling.timeline.models import WorkerConfig

__all__ = ["AbsenceStatus", "Absence", "WorkerProfile", "Roster"]


class AbsenceStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


_STATUS_ALIASES: dict[str, AbsenceStatus] = {
    "pending": AbsenceStatus.PENDING,
    "pendente": AbsenceStatus.PENDING,
    "approved": AbsenceStatus.APPROVED,
    "aprovado": AbsenceStatus.APPROVED,
    "rejected": AbsenceStatus.REJECTED,
    "recusado": AbsenceStatus.REJECTED,
}


class Absence(BaseModel):
    """Single-day absence reported for a worker.

    Attributes
    ----------
    id:
        Unique absence identifier.
    profile_id:
        Worker the absence belongs to (must exist in ``Roster.workers``).
    date:
        Calendar day of the absence.
    reason / description:
        Free-text classification (e.g., ``"Atestado"``) and notes.
    status:
        Review state. Every status counts against presence; the review flow lives elsewhere.
    """

    id: str
    profile_id: str = Field(validation_alias=AliasChoices("profile_id", "profileId"))
    date: dt.date
    reason: str = ""
    description: str = ""
    status: AbsenceStatus = AbsenceStatus.PENDING

    @field_validator("status", mode="before")
    @classmethod
    def _normalise_status(cls, value: object) -> object:
        if isinstance(value, str):
            return _STATUS_ALIASES.get(value.strip().lower(), value)
        return value


class WorkerProfile(WorkerConfig):
    """Worker configuration plus identity and the vacation/overtime overlays.

    Attributes
    ----------
    id / name:
        Identity used by team views and absence references.
    state:
        Optional Brazilian UF code (``"SP"``, ``"RJ"``...) used for state holidays.
    is_active:
        Inactive workers are kept for history but skipped by team coverage.
    vacation_dates / overtime_dates:
        Days on vacation and extra (overtime) work days outside the pattern.
    """

    id: str
    name: str
    state: str | None = None
    is_active: bool = Field(default=True, validation_alias=AliasChoices("is_active", "isActive"))
    notes: str | None = None
    vacation_dates: set[dt.date] = Field(
        default_factory=set, validation_alias=AliasChoices("vacation_dates", "vacationDates")
    )
    overtime_dates: set[dt.date] = Field(
        default_factory=set, validation_alias=AliasChoices("overtime_dates", "overtimeDates")
    )

    @field_validator("state")
    @classmethod
    def _known_state(cls, value: str | None) -> str | None:
        if value is None:
            return value
        code = value.strip().upper()
        if not code:
            return None
        if code not in BRAZIL_STATES:
            raise ValueError(f"Unknown Brazilian state code '{value}'")
        return code


class Roster(BaseModel):
    """Team roster consumed by the evaluation layer and the CLI."""

    name: str
    workers: list[WorkerProfile]
    absences: list[Absence] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> Roster:
        seen: set[str] = set()
        for worker in self.workers:
            if worker.id in seen:
                raise ValueError(f"Duplicate worker id '{worker.id}'")
            seen.add(worker.id)
        for absence in self.absences:
            if absence.profile_id not in seen:
                raise ValueError(
                    f"Absence '{absence.id}' references unknown worker '{absence.profile_id}'"
                )
        return self

    def worker_ids(self) -> list[str]:
        return [w.id for w in self.workers]

    def worker(self, worker_id: str) -> WorkerProfile:
        for worker in self.workers:
            if worker.id == worker_id:
                return worker
        available = ", ".join(self.worker_ids())
        raise EscalaValueError(f"Unknown worker '{worker_id}'. Available: {available}")

    def active_workers(self) -> list[WorkerProfile]:
        return [w for w in self.workers if w.is_active]

    def absences_for(self, worker_id: str) -> list[Absence]:
        return [a for a in self.absences if a.profile_id == worker_id]
