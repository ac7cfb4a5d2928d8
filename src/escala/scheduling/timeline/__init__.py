"""Shift regimes, career timelines and the work-day predicate."""

from .calendar import (
    DEFAULT_ROTATING_OFF_DAYS,
    DEFAULT_ROTATING_WORK_DAYS,
    calendar_day_difference,
    evaluate_pattern,
    is_work_day,
    iter_days,
    iter_work_days,
    parse_calendar_date,
    weekday_ordinal,
)
from .models import CareerChange, ShiftPattern, WorkerConfig, WorkTurn
from .resolver import EffectiveConfig, is_pattern_affecting, resolve_effective_config

__all__ = [
    "CareerChange",
    "ShiftPattern",
    "WorkerConfig",
    "WorkTurn",
    "EffectiveConfig",
    "resolve_effective_config",
    "is_pattern_affecting",
    "is_work_day",
    "evaluate_pattern",
    "parse_calendar_date",
    "weekday_ordinal",
    "calendar_day_difference",
    "iter_days",
    "iter_work_days",
    "DEFAULT_ROTATING_WORK_DAYS",
    "DEFAULT_ROTATING_OFF_DAYS",
]
