"""Shift-pattern calendar engine for small teams working under CLT-style rules."""

from escala.scheduling import (
    CareerChange,
    EffectiveConfig,
    ShiftPattern,
    WorkerConfig,
    WorkTurn,
    is_work_day,
    resolve_effective_config,
)

__version__ = "0.3.0"

__all__ = [
    "CareerChange",
    "EffectiveConfig",
    "ShiftPattern",
    "WorkerConfig",
    "WorkTurn",
    "is_work_day",
    "resolve_effective_config",
    "__version__",
]
