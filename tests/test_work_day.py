from datetime import date, datetime, timedelta

import pandas as pd
import pytest

from escala.scheduling import WorkerConfig, is_work_day
from escala.scheduling.timeline.calendar import (
    iter_days,
    iter_work_days,
    parse_calendar_date,
    weekday_ordinal,
)


def _config(pattern: str, start: str = "2024-01-01", **extra) -> WorkerConfig:
    return WorkerConfig(shift_pattern=pattern, cycle_start_date=start, **extra)


def test_five_two_works_weekdays_only():
    cfg = _config("5x2")
    week = [date(2024, 6, 2) + timedelta(days=i) for i in range(7)]  # Sunday .. Saturday
    assert [is_work_day(d, cfg) for d in week] == [False, True, True, True, True, True, False]


def test_six_one_rests_on_sunday_only():
    cfg = _config("6x1")
    week = [date(2024, 6, 2) + timedelta(days=i) for i in range(7)]
    assert [is_work_day(d, cfg) for d in week] == [False] + [True] * 6


def test_twelve_thirty_six_alternates_from_anchor():
    cfg = _config("12x36", "2024-03-10")
    verdicts = [is_work_day(date(2024, 3, 10) + timedelta(days=i), cfg) for i in range(6)]
    assert verdicts == [True, False, True, False, True, False]


def test_twelve_thirty_six_ignores_dst_and_time_of_day():
    cfg = _config("12x36", "2024-01-01")
    assert is_work_day(datetime(2024, 11, 3, 23, 59), cfg) is is_work_day(date(2024, 11, 3), cfg)
    assert is_work_day("2024-01-03T06:00:00", cfg)


def test_rotating_uses_cycle_position():
    cfg = _config("rotating", rotating_work_days=4, rotating_off_days=2)
    verdicts = [is_work_day(date(2024, 1, 1) + timedelta(days=i), cfg) for i in range(12)]
    assert verdicts == [True] * 4 + [False] * 2 + [True] * 4 + [False] * 2


def test_rotating_defaults_to_five_on_one_off():
    cfg = _config("rotating")
    verdicts = [is_work_day(date(2024, 1, 1) + timedelta(days=i), cfg) for i in range(7)]
    assert verdicts == [True] * 5 + [False, True]


def test_flexible_rests_on_fixed_weekdays():
    cfg = _config("flexible", fixed_off_weekdays=[0, 3])
    assert not is_work_day(date(2024, 6, 2), cfg)  # Sunday
    assert not is_work_day(date(2024, 6, 5), cfg)  # Wednesday
    assert is_work_day(date(2024, 6, 4), cfg)


def test_flexible_without_off_days_works_every_day():
    cfg = _config("flexible")
    assert all(is_work_day(date(2024, 6, 1) + timedelta(days=i), cfg) for i in range(14))


def test_nothing_before_cycle_start():
    cfg = _config("6x1", "2024-03-01")
    assert not is_work_day(date(2024, 2, 29), cfg)
    assert is_work_day(date(2024, 3, 1), cfg)


def test_unknown_pattern_fails_open():
    cfg = _config("4x3")
    assert is_work_day(date(2024, 6, 2), cfg)


@pytest.mark.parametrize("value", [None, "", "not-a-date", "2024-02-30", pd.NaT, 12345])
def test_invalid_dates_are_not_work_days(value):
    assert not is_work_day(value, _config("flexible"))


def test_career_change_switches_pattern_and_anchor():
    cfg = _config(
        "12x36",
        change_history=[
            {
                "effective_date": "2024-06-01",
                "shift_pattern": "rotating",
                "rotating_work_days": 4,
                "rotating_off_days": 2,
            }
        ],
    )
    assert is_work_day(date(2024, 5, 30), cfg)
    assert not is_work_day(date(2024, 5, 31), cfg)
    # Under the old alternation 2024-06-02 would be off; the new cycle starts 2024-06-01.
    assert is_work_day(date(2024, 6, 2), cfg)
    assert not is_work_day(date(2024, 6, 5), cfg)
    assert is_work_day(date(2024, 6, 7), cfg)


def test_change_to_later_anchor_leaves_gap_days_off():
    cfg = _config("5x2", change_history=[{"effective_date": "2024-06-03", "shift_pattern": "flexible"}])
    assert is_work_day(date(2024, 6, 1), cfg) is False  # Saturday under 5x2
    assert is_work_day(date(2024, 6, 2), cfg) is False  # Sunday under 5x2
    assert is_work_day(date(2024, 6, 8), cfg) is True  # Saturday under flexible


def test_iter_work_days_filters_range():
    cfg = _config("5x2")
    days = list(iter_work_days(date(2024, 6, 1), date(2024, 6, 9), cfg))
    assert days == [date(2024, 6, d) for d in range(3, 8)]


def test_parse_calendar_date_and_weekday_ordinal():
    assert parse_calendar_date(pd.Timestamp("2024-06-02 13:00")) == date(2024, 6, 2)
    assert parse_calendar_date(" 2024-06-02 ") == date(2024, 6, 2)
    assert weekday_ordinal(date(2024, 6, 2)) == 0
    assert weekday_ordinal(date(2024, 6, 8)) == 6


def test_flexible_weekend_off_matches_five_two():
    flexible = _config("flexible", fixed_off_weekdays=[0, 6])
    five_two = _config("5x2")
    days = [date(2024, 1, 1) + timedelta(days=i) for i in range(60)]
    assert [is_work_day(d, flexible) for d in days] == [is_work_day(d, five_two) for d in days]


def test_rotating_default_cycle_has_period_six():
    cfg = _config("rotating")
    for i in range(30):
        day = date(2024, 1, 1) + timedelta(days=i)
        assert is_work_day(day, cfg) == is_work_day(day + timedelta(days=6), cfg)


def test_predicate_is_idempotent():
    cfg = _config("12x36", change_history=[{"effective_date": "2024-02-01", "shift_pattern": "6x1"}])
    assert [is_work_day("2024-02-10", cfg) for _ in range(3)] == [is_work_day("2024-02-10", cfg)] * 3


def test_change_dated_before_hire_never_yields_earlier_work_days():
    cfg = _config(
        "12x36",
        "2024-06-01",
        change_history=[{"effective_date": "2024-01-01", "shift_pattern": "5x2"}],
    )
    assert not is_work_day(date(2024, 3, 4), cfg)  # Monday, before hire
    assert not is_work_day(date(2024, 5, 31), cfg)
    assert is_work_day(date(2024, 6, 3), cfg)  # 5x2 from the change, Monday
    assert not is_work_day(date(2024, 6, 1), cfg)  # Saturday


def test_iter_days_stops_at_last_representable_date():
    days = list(iter_days(date.max - timedelta(days=2), date.max))
    assert days[-1] == date.max
    assert len(days) == 3
