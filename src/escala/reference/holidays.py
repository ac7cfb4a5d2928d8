"""National and state holiday calendars (Brazil)."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from pathlib import Path

_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "holidays_br.json"

BRAZIL_STATES: tuple[str, ...] = (
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA", "MT", "MS", "MG", "PA",
    "PB", "PR", "PE", "PI", "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
)  # fmt: skip


@dataclass(frozen=True)
class Holiday:
    """Holiday observed on a single calendar day."""

    date: date
    name: str
    scope: str
    state: str | None = None


@dataclass(frozen=True)
class HolidayCalendar:
    national: tuple[Holiday, ...]
    by_state: Mapping[str, tuple[Holiday, ...]]


def _parse_entries(entries: Sequence[Mapping[str, str]], scope: str, state: str | None) -> tuple[Holiday, ...]:
    return tuple(
        Holiday(date=date.fromisoformat(entry["date"]), name=entry["name"], scope=scope, state=state)
        for entry in entries
    )


@lru_cache(maxsize=1)
def load_holiday_calendar() -> HolidayCalendar:
    if not _DATA_PATH.exists():
        raise FileNotFoundError(f"Holiday dataset missing: {_DATA_PATH}")
    payload = json.loads(_DATA_PATH.read_text(encoding="utf-8"))
    national = _parse_entries(payload.get("national", []), "national", None)
    by_state = {
        code.upper(): _parse_entries(entries, "state", code.upper())
        for code, entries in (payload.get("state") or {}).items()
    }
    return HolidayCalendar(national=national, by_state=by_state)


def holiday_for(day: date, state: str | None = None) -> Holiday | None:
    """Return the holiday on ``day``; national holidays take precedence over state ones."""
    calendar = load_holiday_calendar()
    for holiday in calendar.national:
        if holiday.date == day:
            return holiday
    if state:
        for holiday in calendar.by_state.get(state.upper(), ()):
            if holiday.date == day:
                return holiday
    return None


def holidays_between(start: date, end: date, state: str | None = None) -> list[Holiday]:
    """List holidays between ``start`` and ``end`` inclusive, sorted by date."""
    calendar = load_holiday_calendar()
    candidates = list(calendar.national)
    if state:
        candidates.extend(calendar.by_state.get(state.upper(), ()))
    return sorted((h for h in candidates if start <= h.date <= end), key=lambda h: (h.date, h.scope))


__all__ = [
    "BRAZIL_STATES",
    "Holiday",
    "HolidayCalendar",
    "load_holiday_calendar",
    "holiday_for",
    "holidays_between",
]
