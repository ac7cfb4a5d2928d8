"""Roster validation helpers."""

from .regimes import validate_worker_regime

__all__ = ["validate_worker_regime"]
