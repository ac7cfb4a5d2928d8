from __future__ import annotations

import calendar as _calendar
from datetime import date
from pathlib import Path

import typer
from pydantic import ValidationError
from rich import traceback as rich_traceback
from rich.console import Console
from rich.table import Table

from escala.core.errors import EscalaValueError
from escala.evaluation import (
    MAX_CONSECUTIVE_WORK_DAYS,
    check_vacation_request,
    compliance_alerts,
    consecutive_work_streak,
    day_status,
    is_on_duty,
    month_dataframe,
    month_summary,
    parse_month,
    suggest_vacation_start,
    team_coverage,
    team_month_dataframe,
    vacation_periods,
)
from escala.evaluation.month import month_bounds
from escala.reference.holidays import holiday_for, holidays_between
from escala.scenario.contract import Roster
from escala.scenario.io import load_roster
from escala.scheduling.timeline.calendar import is_work_day, parse_calendar_date
from escala.scheduling.timeline.resolver import EffectiveConfig, resolve_effective_config
from escala.telemetry import append_jsonl, iso_now

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()

_WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
_STATUS_MARKERS = {
    "work": "[green]W[/]",
    "off": "[dim]-[/]",
    "vacation": "[cyan]V[/]",
    "absence": "[red]A[/]",
    "overtime": "[yellow]OT[/]",
    "inactive": " ",
}


def _enable_rich_tracebacks():
    """Enable rich tracebacks with local variables and customized formatting."""
    rich_traceback.install(show_locals=True, width=140, extra_lines=2)


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(1)


def _load(roster_path: Path, *, quiet: bool = False) -> Roster:
    try:
        return load_roster(roster_path, emit_warnings=not quiet)
    except FileNotFoundError as exc:
        raise _fail(f"File not found: {exc}") from exc
    except (EscalaValueError, ValidationError) as exc:
        raise _fail(str(exc)) from exc


def _parse_day(text: str, option: str) -> date:
    day = parse_calendar_date(text)
    if day is None:
        raise typer.BadParameter(f"'{text}' is not a valid YYYY-MM-DD date", param_hint=option)
    return day


def _pattern_label(effective: EffectiveConfig) -> str:
    pattern = effective.shift_pattern
    return getattr(pattern, "value", str(pattern))


def _regime_table(effective: EffectiveConfig, title: str) -> Table:
    t = Table(title=title)
    t.add_column("Field")
    t.add_column("Value")
    t.add_row("Pattern", _pattern_label(effective))
    t.add_row("Cycle anchor", effective.cycle_start_date.isoformat())
    off = ", ".join(_WEEKDAY_LABELS[d] for d in sorted(effective.fixed_off_weekdays)) or "-"
    t.add_row("Fixed off weekdays", off)
    t.add_row("Rotating work/off", f"{effective.rotating_work_days}/{effective.rotating_off_days}")
    t.add_row("Role", effective.role or "-")
    t.add_row("Turn", effective.turn.value if effective.turn else "-")
    return t


@app.command()
def validate(roster: Path):
    """Validate a roster YAML and print summary."""
    rs = _load(roster)
    t = Table(title=f"Roster: {rs.name}")
    t.add_column("Entities")
    t.add_column("Count")
    t.add_row("Workers", str(len(rs.workers)))
    t.add_row("Active workers", str(len(rs.active_workers())))
    t.add_row("Absences", str(len(rs.absences)))
    t.add_row("Career changes", str(sum(len(w.change_history) for w in rs.workers)))
    console.print(t)


@app.command()
def check(
    roster: Path,
    worker_id: str = typer.Argument(..., help="Worker identifier."),
    day: str = typer.Argument(..., help="Day to evaluate (YYYY-MM-DD)."),
    debug: bool = typer.Option(False, "--debug", help="Verbose tracebacks"),
):
    """Report whether a worker is scheduled on a day and which regime applies."""
    if debug:
        _enable_rich_tracebacks()
    rs = _load(roster, quiet=True)
    target = _parse_day(day, "DAY")
    try:
        worker = rs.worker(worker_id)
    except EscalaValueError as exc:
        raise _fail(str(exc)) from exc
    absences = rs.absences_for(worker.id)
    verdict = "work day" if is_work_day(target, worker) else "off"
    status = day_status(target, worker, absences)
    console.print(f"{worker.name} on {target.isoformat()}: {verdict} (status: {status})")
    holiday = holiday_for(target, worker.state)
    if holiday:
        console.print(f"[dim]Holiday: {holiday.name} ({holiday.scope})[/]")
    if target >= worker.cycle_start_date:
        console.print(_regime_table(resolve_effective_config(target, worker), "Effective regime"))


@app.command("calendar")
def calendar_cmd(
    roster: Path,
    worker_id: str = typer.Argument(..., help="Worker identifier."),
    month: str = typer.Option(..., "--month", help="Month to render (YYYY-MM)."),
    out: Path | None = typer.Option(None, "--out", help="Optional CSV path for the day grid."),
    debug: bool = typer.Option(False, "--debug", help="Verbose tracebacks"),
):
    """Render a worker's month (W=work, -=off, V=vacation, A=absence, OT=overtime)."""
    if debug:
        _enable_rich_tracebacks()
    rs = _load(roster, quiet=True)
    try:
        year, month_number = parse_month(month)
        worker = rs.worker(worker_id)
    except EscalaValueError as exc:
        raise _fail(str(exc)) from exc
    absences = rs.absences_for(worker.id)

    grid = Table(title=f"{worker.name} - {_calendar.month_name[month_number]} {year}")
    for label in _WEEKDAY_LABELS:
        grid.add_column(label, justify="center")
    weeks = _calendar.Calendar(firstweekday=6).monthdatescalendar(year, month_number)
    for week in weeks:
        cells = []
        for day in week:
            if day.month != month_number:
                cells.append("")
                continue
            marker = _STATUS_MARKERS[day_status(day, worker, absences)]
            if holiday_for(day, worker.state):
                marker += "*"
            cells.append(f"{day.day:02d} {marker}")
        grid.add_row(*cells)
    console.print(grid)

    summary = month_summary(worker, absences, year, month_number)
    console.print(
        f"Work days: {summary.work_days} | Absences: {summary.absences} | "
        f"Vacation days: {summary.vacation_days} | Overtime: {summary.overtime_days} | "
        f"Presence: {summary.presence_rate}%"
    )
    first, last = month_bounds(year, month_number)
    for period in vacation_periods(worker.vacation_dates, start=first, end=last):
        console.print(f"[cyan]Vacation[/] {period.start} -> {period.end} ({period.days} days)")
    for holiday in holidays_between(first, last, worker.state):
        console.print(f"[dim]* {holiday.date} {holiday.name}[/]")

    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        month_dataframe(worker, absences, year, month_number).to_csv(str(out), index=False)
        console.print(f"Saved day grid to {out}")


@app.command()
def team(
    roster: Path,
    day: str = typer.Option(..., "--date", help="Day to evaluate (YYYY-MM-DD)."),
    out: Path | None = typer.Option(
        None, "--out", help="Optional CSV path for the on-duty grid of the day's month."
    ),
):
    """Show who is on duty on a day, grouped by turn and role."""
    rs = _load(roster, quiet=True)
    target = _parse_day(day, "--date")
    coverage = team_coverage(target, rs)
    names = {w.id: w.name for w in rs.workers}

    t = Table(title=f"Turns on {target.isoformat()}")
    t.add_column("Turn")
    t.add_column("On duty")
    t.add_column("Workers")
    for turn, bucket in coverage.by_turn.items():
        t.add_row(turn, f"{bucket.active}/{bucket.total}", ", ".join(names[i] for i in bucket.worker_ids))
    console.print(t)

    r = Table(title="Roles")
    r.add_column("Role")
    r.add_column("On duty")
    for role in sorted(coverage.by_role):
        bucket = coverage.by_role[role]
        r.add_row(role, f"{bucket.active}/{bucket.total}")
    console.print(r)
    console.print(
        f"Team on duty: {coverage.total_active}/{coverage.total_team} ({coverage.global_percent}%)"
    )

    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        team_month_dataframe(rs, target.year, target.month).to_csv(str(out), index=False)
        console.print(f"Saved team grid to {out}")


@app.command()
def alerts(
    roster: Path,
    day: str = typer.Option(..., "--date", help="Day the streaks end on (YYYY-MM-DD)."),
    limit: int = typer.Option(
        MAX_CONSECUTIVE_WORK_DAYS, "--limit", help="Maximum consecutive work days allowed."
    ),
    telemetry_log: Path | None = typer.Option(
        None, "--telemetry-log", help="Append alert records to this JSONL file."
    ),
):
    """Report consecutive-work streaks and flag workers above the CLT limit."""
    rs = _load(roster, quiet=True)
    target = _parse_day(day, "--date")

    t = Table(title=f"Streaks ending {target.isoformat()}")
    t.add_column("Worker")
    t.add_column("Streak")
    t.add_column("Since")
    for worker in rs.active_workers():
        streak = consecutive_work_streak(target, worker, rs.absences_for(worker.id))
        count = f"[red]{streak.count}[/]" if streak.count > limit else str(streak.count)
        t.add_row(worker.name, count, streak.start.isoformat() if streak.start else "-")
    console.print(t)

    found = compliance_alerts(rs, target, limit=limit)
    if not found:
        console.print(f"No worker above {limit} consecutive work days.")
        return
    for alert in found:
        console.print(
            f"[red]CLT alert:[/red] {alert.worker_name} has worked {alert.streak} consecutive days "
            f"(limit {alert.limit})"
        )
    if telemetry_log is not None:
        for alert in found:
            record = alert.to_record()
            record.update({"roster": rs.name, "timestamp": iso_now()})
            append_jsonl(telemetry_log, record)
        console.print(f"[dim]{len(found)} alert record(s) written to {telemetry_log}[/]")


@app.command()
def vacation(
    roster: Path,
    worker_id: str = typer.Argument(..., help="Worker identifier."),
    start: str = typer.Option(..., "--start", help="First vacation day (YYYY-MM-DD)."),
    days: int = typer.Option(10, "--days", min=1, help="Vacation length in days."),
):
    """Check a vacation request for personal and same-role conflicts."""
    rs = _load(roster, quiet=True)
    first = _parse_day(start, "--start")
    try:
        worker = rs.worker(worker_id)
        result = check_vacation_request(worker, rs, first, days)
    except EscalaValueError as exc:
        raise _fail(str(exc)) from exc

    console.print(f"Vacation {result.start} -> {result.end} ({result.days} days) for {worker.name}")
    for conflict in result.peer_conflicts:
        shared = ", ".join(d.isoformat() for d in conflict.dates)
        console.print(f"[yellow]Peer on vacation:[/] {conflict.name} ({shared})")
    if result.blocked:
        for reason in result.reasons():
            console.print(f"[red]Blocked:[/red] {reason}")
        if not result.starts_on_work_day:
            suggestion = suggest_vacation_start(worker, first)
            if suggestion != first:
                console.print(f"Suggested start: {suggestion.isoformat()}")
        raise typer.Exit(1)
    on_duty_days = sum(1 for d in result.dates if is_on_duty(d, worker, rs.absences_for(worker.id)))
    console.print(f"[green]OK[/green]: request is valid ({on_duty_days} scheduled day(s) covered)")


if __name__ == "__main__":
    app()
