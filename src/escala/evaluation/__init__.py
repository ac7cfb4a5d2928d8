"""Evaluation layer (duty overlays, streaks, month and team views, vacation planning)."""

from .duty import absence_dates, day_status, is_absent, is_on_duty, is_on_vacation, is_overtime
from .month import MONTH_GRID_COLUMNS, MonthSummary, month_dataframe, month_summary, parse_month
from .streak import (
    MAX_CONSECUTIVE_WORK_DAYS,
    ComplianceAlert,
    WorkStreak,
    compliance_alerts,
    consecutive_work_streak,
    is_clt_violation,
)
from .team import TeamCoverage, team_coverage, team_month_dataframe, who_works_on, workers_by_turn
from .vacation import (
    PeerConflict,
    VacationCheck,
    VacationPeriod,
    book_vacation,
    check_vacation_request,
    remove_vacation_period,
    suggest_vacation_start,
    toggle_overtime,
    vacation_periods,
)

__all__ = [
    "absence_dates",
    "day_status",
    "is_absent",
    "is_on_duty",
    "is_on_vacation",
    "is_overtime",
    "MONTH_GRID_COLUMNS",
    "MonthSummary",
    "month_dataframe",
    "month_summary",
    "parse_month",
    "MAX_CONSECUTIVE_WORK_DAYS",
    "ComplianceAlert",
    "WorkStreak",
    "compliance_alerts",
    "consecutive_work_streak",
    "is_clt_violation",
    "TeamCoverage",
    "team_coverage",
    "team_month_dataframe",
    "who_works_on",
    "workers_by_turn",
    "PeerConflict",
    "VacationCheck",
    "VacationPeriod",
    "book_vacation",
    "check_vacation_request",
    "remove_vacation_period",
    "suggest_vacation_start",
    "toggle_overtime",
    "vacation_periods",
]
