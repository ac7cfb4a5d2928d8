from datetime import date

from escala.evaluation import (
    compliance_alerts,
    consecutive_work_streak,
    day_status,
    is_clt_violation,
    is_on_duty,
)
from escala.scheduling import CareerChange


def test_absence_removes_duty(roster):
    ana = roster.worker("ana")
    absences = roster.absences_for("ana")
    assert not is_on_duty(date(2024, 6, 5), ana, absences)
    assert day_status(date(2024, 6, 5), ana, absences) == "absence"
    assert is_on_duty(date(2024, 6, 4), ana, absences)


def test_overtime_adds_duty_on_off_day(roster):
    ana = roster.worker("ana")
    assert is_on_duty(date(2024, 6, 8), ana, [])
    assert day_status(date(2024, 6, 8), ana, []) == "overtime"
    assert day_status(date(2024, 6, 9), ana, []) == "off"


def test_vacation_removes_duty(roster):
    ana = roster.worker("ana")
    assert not is_on_duty(date(2024, 7, 8), ana, [])
    assert day_status(date(2024, 7, 8), ana, []) == "vacation"


def test_before_start_is_inactive(roster):
    carla = roster.worker("carla")
    assert day_status(date(2024, 2, 1), carla, []) == "inactive"
    assert not is_on_duty("2024-02-01", carla, [])


def test_invalid_date_is_not_on_duty(roster):
    assert not is_on_duty("garbage", roster.worker("ana"), [])


def test_streak_stops_at_absence(roster):
    streak = consecutive_work_streak(date(2024, 6, 8), roster.worker("ana"), roster.absences_for("ana"))
    assert streak.count == 3
    assert streak.start == date(2024, 6, 6)
    assert streak.dates[-1] == date(2024, 6, 8)


def test_streak_is_empty_on_day_off(roster):
    streak = consecutive_work_streak(date(2024, 6, 9), roster.worker("carla"), [])
    assert streak.count == 0
    assert streak.start is None


def test_streak_stops_at_start_date(roster):
    streak = consecutive_work_streak(date(2024, 6, 9), roster.worker("dani"), [])
    assert streak.count == 9
    assert streak.start == date(2024, 6, 1)


def test_streak_respects_lookback_limit(roster):
    streak = consecutive_work_streak(date(2024, 6, 9), roster.worker("dani"), [], limit=4)
    assert streak.count == 4


def test_clt_violation_threshold():
    assert not is_clt_violation(6)
    assert is_clt_violation(7)
    assert is_clt_violation(3, limit=2)


def test_compliance_alerts_flag_long_streaks(roster):
    alerts = compliance_alerts(roster, date(2024, 6, 9))
    assert [a.worker_id for a in alerts] == ["dani"]
    record = alerts[0].to_record()
    assert record["record_type"] == "clt_alert"
    assert record["streak"] == 9
    assert record["streak_start"] == "2024-06-01"


def test_compliance_alerts_skip_inactive_and_filtered_workers(roster):
    dani = roster.worker("dani")
    dani.is_active = False
    assert compliance_alerts(roster, date(2024, 6, 9)) == []
    dani.is_active = True
    assert compliance_alerts(roster, date(2024, 6, 9), worker_ids=["ana"]) == []


def test_change_before_hire_keeps_worker_off_duty(roster):
    carla = roster.worker("carla").model_copy(
        update={"change_history": [CareerChange(effective_date=date(2024, 1, 1), shift_pattern="5x2")]}
    )
    assert day_status(date(2024, 2, 5), carla, []) == "inactive"
    assert not is_on_duty(date(2024, 2, 5), carla, [])
    assert is_on_duty(date(2024, 3, 4), carla, [])
