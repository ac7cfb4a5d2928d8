"""Sanity checks on worker regimes that load fine but behave surprisingly."""

from __future__ import annotations

from datetime import date
from typing import List

from escala.scheduling.timeline.models import ShiftPattern, WorkerConfig
from escala.scheduling.timeline.resolver import EffectiveConfig, resolve_effective_config


def _regime_warnings(label: str, effective: EffectiveConfig, since: date) -> list[str]:
    warnings: List[str] = []
    pattern = effective.shift_pattern
    if not isinstance(pattern, ShiftPattern):
        warnings.append(
            f"{label}: shift pattern '{pattern}' (from {since}) is not recognised; "
            "every day counts as a work day"
        )
        return warnings
    if pattern == ShiftPattern.ROTATING and (
        effective.rotating_work_days is None or effective.rotating_off_days is None
    ):
        warnings.append(
            f"{label}: rotating regime from {since} lacks explicit work/off counts; "
            "the 5-on/1-off default fills the gap"
        )
    if pattern == ShiftPattern.FLEXIBLE and not effective.fixed_off_weekdays:
        warnings.append(f"{label}: flexible regime from {since} has no fixed off weekday")
    if pattern != ShiftPattern.FLEXIBLE and effective.fixed_off_weekdays:
        warnings.append(
            f"{label}: fixed_off_weekdays are ignored by the {pattern.value} regime from {since}"
        )
    return warnings


def _regime_key(effective: EffectiveConfig) -> tuple[object, ...]:
    return (
        effective.shift_pattern,
        effective.cycle_start_date,
        effective.fixed_off_weekdays,
        effective.rotating_work_days,
        effective.rotating_off_days,
    )


def _regime_checkpoints(config: WorkerConfig) -> list[date]:
    """Base start plus every change date on which the regime actually changes."""
    checkpoints = [config.cycle_start_date]
    current = EffectiveConfig.from_config(config)
    for change_date in sorted({change.effective_date for change in config.change_history}):
        effective = resolve_effective_config(change_date, config)
        if _regime_key(effective) != _regime_key(current) and change_date not in checkpoints:
            checkpoints.append(change_date)
        current = effective
    return checkpoints


def validate_worker_regime(*, worker_id: str, config: WorkerConfig) -> list[str]:
    """Return warnings for the base regime and for every regime introduced by a career change."""

    label = f"Worker {worker_id}"
    warnings: List[str] = []
    for checkpoint in _regime_checkpoints(config):
        effective = resolve_effective_config(checkpoint, config)
        for msg in _regime_warnings(label, effective, checkpoint):
            if msg not in warnings:
                warnings.append(msg)
    return warnings


__all__ = ["validate_worker_regime"]
