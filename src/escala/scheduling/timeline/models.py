"""Pydantic models describing a worker's shift regime and its career timeline."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field, field_validator

__all__ = [
    "ShiftPattern",
    "WorkTurn",
    "CareerChange",
    "WorkerConfig",
    "normalize_shift_pattern",
    "normalize_work_turn",
]


class ShiftPattern(str, Enum):
    FIXED_FIVE_TWO = "5x2"
    FIXED_SIX_ONE = "6x1"
    TWELVE_THIRTY_SIX = "12x36"
    ROTATING = "rotating"
    FLEXIBLE = "flexible"


class WorkTurn(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


# Labels persisted by older roster exports.
_PATTERN_ALIASES: dict[str, ShiftPattern] = {
    "5x2": ShiftPattern.FIXED_FIVE_TWO,
    "6x1": ShiftPattern.FIXED_SIX_ONE,
    "12x36": ShiftPattern.TWELVE_THIRTY_SIX,
    "rotating": ShiftPattern.ROTATING,
    "revezamento": ShiftPattern.ROTATING,
    "flexible": ShiftPattern.FLEXIBLE,
    "flexível": ShiftPattern.FLEXIBLE,
    "flexivel": ShiftPattern.FLEXIBLE,
}

_TURN_ALIASES: dict[str, WorkTurn] = {
    "morning": WorkTurn.MORNING,
    "manhã": WorkTurn.MORNING,
    "manha": WorkTurn.MORNING,
    "afternoon": WorkTurn.AFTERNOON,
    "tarde": WorkTurn.AFTERNOON,
    "night": WorkTurn.NIGHT,
    "noite": WorkTurn.NIGHT,
}


def normalize_shift_pattern(value: object) -> ShiftPattern | str | None:
    """Map a pattern label onto :class:`ShiftPattern`.

    Unrecognised labels are returned as stripped strings rather than rejected so the
    work-day predicate can apply its permissive default to them.
    """
    if value is None or isinstance(value, ShiftPattern):
        return value
    text = str(value).strip()
    return _PATTERN_ALIASES.get(text.lower(), text)


def normalize_work_turn(value: object) -> WorkTurn | None:
    if value is None or isinstance(value, WorkTurn):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return _TURN_ALIASES[text.lower()]
    except KeyError as exc:
        allowed = ", ".join(turn.value for turn in WorkTurn)
        raise ValueError(f"Unknown work turn '{value}'. Allowed: {allowed}") from exc


def _check_weekdays(value: list[int] | None) -> list[int] | None:
    if value is None:
        return value
    for weekday in value:
        if not 0 <= weekday <= 6:
            raise ValueError("fixed_off_weekdays entries must lie in [0, 6] (0=Sunday)")
    return sorted(set(value))


def _check_rotating(value: int | None) -> int | None:
    if value is not None and value < 1:
        raise ValueError("rotating work/off day counts must be >= 1")
    return value


class CareerChange(BaseModel):
    """Partial override of a worker's regime that applies from ``effective_date`` onward.

    Attributes
    ----------
    effective_date:
        First calendar day on which the override applies.
    id:
        Optional identifier assigned by the roster owner.
    shift_pattern / fixed_off_weekdays / rotating_work_days / rotating_off_days / role / turn:
        Fields to overlay. ``None`` means the entry leaves the value untouched.
    """

    effective_date: date = Field(
        validation_alias=AliasChoices("effective_date", "date", "effectiveDate")
    )
    id: str | None = None
    shift_pattern: ShiftPattern | str | None = Field(
        default=None,
        union_mode="left_to_right",
        validation_alias=AliasChoices("shift_pattern", "shiftType", "shift_type"),
    )
    fixed_off_weekdays: list[int] | None = Field(
        default=None,
        validation_alias=AliasChoices("fixed_off_weekdays", "offDays", "off_days"),
    )
    rotating_work_days: int | None = Field(
        default=None, validation_alias=AliasChoices("rotating_work_days", "rotatingWorkDays")
    )
    rotating_off_days: int | None = Field(
        default=None, validation_alias=AliasChoices("rotating_off_days", "rotatingOffDays")
    )
    role: str | None = None
    turn: WorkTurn | None = None

    @field_validator("shift_pattern", mode="before")
    @classmethod
    def _normalise_pattern(cls, value: object) -> ShiftPattern | str | None:
        return normalize_shift_pattern(value)

    @field_validator("turn", mode="before")
    @classmethod
    def _normalise_turn(cls, value: object) -> WorkTurn | None:
        return normalize_work_turn(value)

    @field_validator("fixed_off_weekdays")
    @classmethod
    def _weekdays_in_range(cls, value: list[int] | None) -> list[int] | None:
        return _check_weekdays(value)

    @field_validator("rotating_work_days", "rotating_off_days")
    @classmethod
    def _rotating_positive(cls, value: int | None) -> int | None:
        return _check_rotating(value)


class WorkerConfig(BaseModel):
    """Currently active shift regime of a worker plus its change timeline.

    Attributes
    ----------
    shift_pattern:
        Pattern branch used by :func:`escala.scheduling.timeline.calendar.is_work_day`.
    cycle_start_date:
        Hire/anchor date. No day before it is ever a work day; cycle-based patterns count
        offsets from it.
    fixed_off_weekdays:
        Weekday ordinals (0=Sunday..6=Saturday) that are always off. Only used by
        ``ShiftPattern.FLEXIBLE``.
    rotating_work_days / rotating_off_days:
        Work/off run lengths for ``ShiftPattern.ROTATING``. Missing values fall back to a
        5-on/1-off cadence at evaluation time.
    role / turn:
        Descriptive attributes carried into effective snapshots (team views group by them).
    change_history:
        Career changes in any order; the resolver sorts them by ``effective_date``.
    """

    shift_pattern: ShiftPattern | str = Field(
        union_mode="left_to_right",
        validation_alias=AliasChoices("shift_pattern", "shiftType", "shift_type"),
    )
    cycle_start_date: date = Field(
        validation_alias=AliasChoices("cycle_start_date", "start_date", "startDate")
    )
    fixed_off_weekdays: list[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("fixed_off_weekdays", "offDays", "off_days"),
    )
    rotating_work_days: int | None = Field(
        default=None, validation_alias=AliasChoices("rotating_work_days", "rotatingWorkDays")
    )
    rotating_off_days: int | None = Field(
        default=None, validation_alias=AliasChoices("rotating_off_days", "rotatingOffDays")
    )
    role: str = ""
    turn: WorkTurn | None = None
    change_history: list[CareerChange] = Field(
        default_factory=list,
        validation_alias=AliasChoices("change_history", "career_history", "careerHistory"),
    )

    @field_validator("shift_pattern", mode="before")
    @classmethod
    def _normalise_pattern(cls, value: object) -> ShiftPattern | str:
        normalized = normalize_shift_pattern(value)
        if normalized is None:
            raise ValueError("shift_pattern is required")
        return normalized

    @field_validator("turn", mode="before")
    @classmethod
    def _normalise_turn(cls, value: object) -> WorkTurn | None:
        return normalize_work_turn(value)

    @field_validator("fixed_off_weekdays")
    @classmethod
    def _weekdays_in_range(cls, value: list[int]) -> list[int]:
        return _check_weekdays(value) or []

    @field_validator("rotating_work_days", "rotating_off_days")
    @classmethod
    def _rotating_positive(cls, value: int | None) -> int | None:
        return _check_rotating(value)
