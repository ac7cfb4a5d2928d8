"""Resolve the regime that applies to a worker on a given day."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date

from .models import CareerChange, ShiftPattern, WorkerConfig, WorkTurn

__all__ = ["EffectiveConfig", "resolve_effective_config", "is_pattern_affecting"]


@dataclass(slots=True, frozen=True)
class EffectiveConfig:
    """Configuration snapshot in force on a specific day."""

    shift_pattern: ShiftPattern | str
    cycle_start_date: date
    fixed_off_weekdays: frozenset[int]
    rotating_work_days: int | None
    rotating_off_days: int | None
    role: str
    turn: WorkTurn | None

    @classmethod
    def from_config(cls, config: WorkerConfig) -> EffectiveConfig:
        return cls(
            shift_pattern=config.shift_pattern,
            cycle_start_date=config.cycle_start_date,
            fixed_off_weekdays=frozenset(config.fixed_off_weekdays),
            rotating_work_days=config.rotating_work_days,
            rotating_off_days=config.rotating_off_days,
            role=config.role,
            turn=config.turn,
        )


def is_pattern_affecting(change: CareerChange, current: EffectiveConfig) -> bool:
    """Return ``True`` when ``change`` alters the pattern or its cadence relative to ``current``."""
    if change.shift_pattern is not None and change.shift_pattern != current.shift_pattern:
        return True
    if (
        change.rotating_work_days is not None
        and change.rotating_work_days != current.rotating_work_days
    ):
        return True
    if (
        change.rotating_off_days is not None
        and change.rotating_off_days != current.rotating_off_days
    ):
        return True
    return False


def _apply_change(current: EffectiveConfig, change: CareerChange) -> EffectiveConfig:
    updates: dict[str, object] = {}
    if is_pattern_affecting(change, current):
        # Cycle-based patterns restart on the regime-change day.
        updates["cycle_start_date"] = change.effective_date
    if change.shift_pattern is not None:
        updates["shift_pattern"] = change.shift_pattern
    if change.fixed_off_weekdays is not None:
        updates["fixed_off_weekdays"] = frozenset(change.fixed_off_weekdays)
    if change.rotating_work_days is not None:
        updates["rotating_work_days"] = change.rotating_work_days
    if change.rotating_off_days is not None:
        updates["rotating_off_days"] = change.rotating_off_days
    if change.role:
        updates["role"] = change.role
    if change.turn is not None:
        updates["turn"] = change.turn
    if not updates:
        return current
    return replace(current, **updates)


def resolve_effective_config(target_date: date, base_config: WorkerConfig) -> EffectiveConfig:
    """Fold the career timeline of ``base_config`` up to ``target_date``.

    Parameters
    ----------
    target_date:
        Calendar day being evaluated. Changes dated after it are ignored.
    base_config:
        Worker configuration; never modified.

    Returns
    -------
    EffectiveConfig
        Snapshot built from the base fields overlaid, in ascending ``effective_date`` order,
        by every change dated on or before ``target_date``. Changes sharing a date apply in
        their original order.

    Notes
    -----
    Pattern-affecting detection compares each change against the values accumulated so far,
    not against the base configuration, so re-stating an unchanged cadence does not move the
    cycle anchor.
    """
    effective = EffectiveConfig.from_config(base_config)
    if not base_config.change_history:
        return effective
    ordered = sorted(base_config.change_history, key=lambda change: change.effective_date)
    for change in ordered:
        if change.effective_date > target_date:
            break
        effective = _apply_change(effective, change)
    return effective
