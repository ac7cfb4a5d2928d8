"""Roster contract models (Pydantic schemas, validators)."""

from .models import Absence, AbsenceStatus, Roster, WorkerProfile

__all__ = ["Absence", "AbsenceStatus", "Roster", "WorkerProfile"]
