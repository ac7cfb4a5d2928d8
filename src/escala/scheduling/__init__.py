"""Scheduling utilities (shift regimes, career timeline, work-day predicate)."""

from .timeline import (
    CareerChange,
    EffectiveConfig,
    ShiftPattern,
    WorkerConfig,
    WorkTurn,
    is_work_day,
    iter_work_days,
    parse_calendar_date,
    resolve_effective_config,
)

__all__ = [
    "CareerChange",
    "EffectiveConfig",
    "ShiftPattern",
    "WorkerConfig",
    "WorkTurn",
    "is_work_day",
    "iter_work_days",
    "parse_calendar_date",
    "resolve_effective_config",
]
