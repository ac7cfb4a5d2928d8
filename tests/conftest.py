from pathlib import Path

import pytest
import yaml

from escala.scenario.contract import Roster

ROSTER_META = {
    "name": "test-team",
    "workers": [
        {
            "id": "ana",
            "name": "Ana Souza",
            "shift_pattern": "5x2",
            "cycle_start_date": "2024-01-01",
            "role": "nurse",
            "turn": "morning",
            "state": "SP",
            "vacation_dates": [f"2024-07-{d:02d}" for d in range(8, 13)],
            "overtime_dates": ["2024-06-08"],
        },
        {
            "id": "bruno",
            "name": "Bruno Lima",
            "shift_pattern": "12x36",
            "cycle_start_date": "2024-01-01",
            "role": "nurse",
            "turn": "night",
            "change_history": [
                {
                    "effective_date": "2024-06-01",
                    "shift_pattern": "rotating",
                    "rotating_work_days": 4,
                    "rotating_off_days": 2,
                }
            ],
        },
        {
            "id": "carla",
            "name": "Carla Dias",
            "shift_pattern": "6x1",
            "cycle_start_date": "2024-03-01",
            "role": "receptionist",
            "turn": "afternoon",
        },
        {
            "id": "dani",
            "name": "Dani Rocha",
            "shift_pattern": "flexible",
            "cycle_start_date": "2024-06-01",
            "fixed_off_weekdays": [],
            "role": "nurse",
            "turn": "Noite",
            "vacation_dates": ["2024-06-12", "2024-06-13"],
        },
    ],
    "absences": [
        {
            "id": "abs-1",
            "profile_id": "ana",
            "date": "2024-06-05",
            "reason": "Atestado",
            "status": "Aprovado",
        }
    ],
}


@pytest.fixture
def roster_meta() -> dict:
    return yaml.safe_load(yaml.safe_dump(ROSTER_META))


@pytest.fixture
def roster(roster_meta) -> Roster:
    return Roster.model_validate(roster_meta)


@pytest.fixture
def roster_path(tmp_path: Path, roster_meta) -> Path:
    path = tmp_path / "roster.yaml"
    path.write_text(yaml.safe_dump(roster_meta, allow_unicode=True), encoding="utf-8")
    return path
