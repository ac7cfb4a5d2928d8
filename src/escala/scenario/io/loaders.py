"""Roster loading utilities (YAML metadata + optional CSV absence table)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import pandas as pd
import yaml
from pydantic import TypeAdapter

from escala.core.errors import EscalaValueError
from escala.scenario.contract.models import Absence, Roster, WorkerProfile
from escala.validation.regimes import validate_worker_regime

__all__ = ["load_roster", "read_csv", "roster_warnings"]

_ABSENCE_TEXT_FIELDS = ("reason", "description", "status")


def read_csv(path: Path) -> pd.DataFrame:
    """Load a CSV file using pandas with UTF-8 defaults."""
    return pd.read_csv(path, dtype={"id": str, "profile_id": str})


def _as_optional_string(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if pd.isna(cast("Any", value)):
        return None
    return str(value)


def _normalise_absence_rows(rows: list[dict[str, object]]) -> None:
    for row in rows:
        for field in _ABSENCE_TEXT_FIELDS:
            normalised = _as_optional_string(row.get(field))
            if normalised is None:
                row.pop(field, None)
            else:
                row[field] = normalised


def load_roster(yaml_path: str | Path, *, emit_warnings: bool = True) -> Roster:
    """Load a Roster from a YAML file.

    Parameters
    ----------
    yaml_path:
        Path to the roster YAML. Expected keys: ``name``, ``workers`` and optionally
        ``absences`` (inline list) or ``data.absences`` (CSV path relative to the YAML).
    emit_warnings:
        Print regime warnings (unknown patterns, defaulted rotating cadence...) to stdout.

    Returns
    -------
    Roster
        Validated roster with unique worker ids and resolved absence references.

    Raises
    ------
    FileNotFoundError
        When the YAML or a referenced CSV is missing.
    EscalaValueError
        When the YAML does not describe a roster mapping.
    pydantic.ValidationError
        When workers or absences fail model validation.
    """
    base_path = Path(yaml_path).resolve()
    if not base_path.exists():
        raise FileNotFoundError(base_path)
    with base_path.open("r", encoding="utf-8") as handle:
        meta = yaml.safe_load(handle)
    if not isinstance(meta, dict):
        raise EscalaValueError(f"Roster file {base_path} must contain a mapping")
    root = base_path.parent
    data_section = meta.get("data") or {}

    workers = TypeAdapter(list[WorkerProfile]).validate_python(meta.get("workers") or [])

    absences: list[Absence] = []
    if "absences" in data_section:
        csv_path = root / data_section["absences"]
        if not csv_path.exists():
            raise FileNotFoundError(csv_path)
        rows = cast(list[dict[str, object]], read_csv(csv_path).to_dict("records"))
        _normalise_absence_rows(rows)
        absences = TypeAdapter(list[Absence]).validate_python(rows)
    elif "absences" in meta:
        absences = TypeAdapter(list[Absence]).validate_python(meta["absences"] or [])

    roster = Roster(
        name=str(meta.get("name") or base_path.stem),
        workers=workers,
        absences=absences,
    )
    if emit_warnings:
        for msg in roster_warnings(roster):
            print(f"[roster:{roster.name}] {msg}")
    return roster


def roster_warnings(roster: Roster) -> list[str]:
    """Collect regime warnings for every worker in ``roster``."""
    warnings: list[str] = []
    for worker in roster.workers:
        warnings.extend(validate_worker_regime(worker_id=worker.id, config=worker))
    return warnings
