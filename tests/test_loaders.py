from datetime import date

import pytest
import yaml
from pydantic import ValidationError

from escala.core.errors import EscalaValueError
from escala.scenario.contract import AbsenceStatus
from escala.scenario.io import load_roster, roster_warnings
from escala.scheduling import WorkTurn


def test_load_roster_with_inline_absences(roster_path, capsys):
    roster = load_roster(roster_path)
    assert roster.name == "test-team"
    assert roster.worker_ids() == ["ana", "bruno", "carla", "dani"]
    assert roster.worker("dani").turn is WorkTurn.NIGHT
    assert roster.absences[0].status is AbsenceStatus.APPROVED
    assert roster.absences[0].date == date(2024, 6, 5)
    out = capsys.readouterr().out
    assert "[roster:test-team] Worker dani: flexible regime from 2024-06-01 has no fixed off weekday" in out


def test_load_roster_quiet(roster_path, capsys):
    load_roster(roster_path, emit_warnings=False)
    assert capsys.readouterr().out == ""


def test_load_roster_reads_absence_csv(tmp_path, roster_meta):
    roster_meta.pop("absences")
    roster_meta["data"] = {"absences": "absences.csv"}
    (tmp_path / "absences.csv").write_text(
        "id,profile_id,date,reason,description,status\n"
        "a1,carla,2024-06-04,Atestado,,Pendente\n"
        "a2,bruno,2024-06-07,,,\n",
        encoding="utf-8",
    )
    path = tmp_path / "roster.yaml"
    path.write_text(yaml.safe_dump(roster_meta), encoding="utf-8")
    roster = load_roster(path, emit_warnings=False)
    assert [a.id for a in roster.absences] == ["a1", "a2"]
    assert roster.absences[0].status is AbsenceStatus.PENDING
    assert roster.absences[1].reason == ""


def test_missing_absence_csv(tmp_path, roster_meta):
    roster_meta["data"] = {"absences": "missing.csv"}
    path = tmp_path / "roster.yaml"
    path.write_text(yaml.safe_dump(roster_meta), encoding="utf-8")
    with pytest.raises(FileNotFoundError):
        load_roster(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_roster(tmp_path / "nope.yaml")


def test_non_mapping_yaml(tmp_path):
    path = tmp_path / "roster.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(EscalaValueError):
        load_roster(path)


def test_duplicate_worker_ids_rejected(tmp_path, roster_meta):
    roster_meta["workers"].append(dict(roster_meta["workers"][0]))
    path = tmp_path / "roster.yaml"
    path.write_text(yaml.safe_dump(roster_meta), encoding="utf-8")
    with pytest.raises(ValidationError, match="Duplicate worker id 'ana'"):
        load_roster(path)


def test_dangling_absence_rejected(tmp_path, roster_meta):
    roster_meta["absences"][0]["profile_id"] = "zeca"
    path = tmp_path / "roster.yaml"
    path.write_text(yaml.safe_dump(roster_meta), encoding="utf-8")
    with pytest.raises(ValidationError, match="unknown worker 'zeca'"):
        load_roster(path)


def test_unknown_state_rejected(tmp_path, roster_meta):
    roster_meta["workers"][0]["state"] = "XX"
    path = tmp_path / "roster.yaml"
    path.write_text(yaml.safe_dump(roster_meta), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_roster(path)


def test_unknown_worker_lookup(roster):
    with pytest.raises(EscalaValueError, match="Unknown worker 'zeca'"):
        roster.worker("zeca")


def test_roster_warnings_lists_every_worker(roster):
    assert roster_warnings(roster) == [
        "Worker dani: flexible regime from 2024-06-01 has no fixed off weekday"
    ]
