"""Doctor schedule parsing, relative-day resolution and slot availability."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone

from pydantic import BaseModel, Field

WEEKDAY_NAMES = (
    'monday',
    'tuesday',
    'wednesday',
    'thursday',
    'friday',
    'saturday',
    'sunday',
)


class InvalidDayError(ValueError):
    """Raised when a day reference is not "today", "tomorrow" or a weekday name."""


class DoctorAvailability(BaseModel):
    available: bool
    available_times: list[str] = Field(alias='availableTimes')
    booked_times: list[str] = Field(alias='bookedTimes')

    class Config:
        populate_by_name = True


def current_date() -> date:
    return datetime.now(timezone.utc).date()


def weekday_name(target_date: date) -> str:
    return WEEKDAY_NAMES[target_date.weekday()]


def parse_schedule_tokens(raw: str | None) -> list[str]:
    """Split a comma-separated schedule field into trimmed tokens.

    Order and duplicates are preserved; blank entries are dropped.
    """
    if not raw:
        return []

    return [token.strip() for token in raw.split(',') if token.strip()]


def is_available_on_day(available_days: str | None, target_date: date) -> bool:
    requested_day = weekday_name(target_date)
    days = parse_schedule_tokens((available_days or '').lower())
    # Entries only need to contain the weekday name, e.g. "monday morning".
    return any(requested_day in day for day in days)


def resolve_relative_day(day: str, today: date | None = None) -> date:
    """Turn "today", "tomorrow" or a weekday name into a calendar date.

    A weekday name resolves to its next occurrence strictly after ``today``,
    so asking for today's weekday gives the date one week ahead.
    """
    today = today or current_date()
    normalized = (day or '').strip().lower()

    if normalized == 'today':
        return today

    if normalized == 'tomorrow':
        return today + timedelta(days=1)

    if normalized not in WEEKDAY_NAMES:
        raise InvalidDayError(f'Invalid day specified: {day!r}')

    days_to_add = (WEEKDAY_NAMES.index(normalized) - today.weekday()) % 7 or 7
    return today + timedelta(days=days_to_add)


def compute_availability(
    available_days: str | None,
    available_times: str | None,
    booked_times: Iterable[str],
    target_date: date,
) -> DoctorAvailability:
    booked = list(dict.fromkeys(booked_times))
    booked_lookup = set(booked)
    available = is_available_on_day(available_days, target_date)

    free_slots: list[str] = []
    if available:
        free_slots = [slot for slot in parse_schedule_tokens(available_times) if slot not in booked_lookup]

    return DoctorAvailability(
        available=available,
        available_times=free_slots,
        booked_times=booked,
    )
