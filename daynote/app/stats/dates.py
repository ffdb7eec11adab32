"""Calendar helpers shared by the analytics engine and calendar views.

All weekday indexing here follows ``date.weekday()``: Monday is 0, Sunday 6.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

DEFAULT_LOCALE = "tr"

# Monday-first weekday abbreviations
WEEKDAY_LABELS: dict[str, tuple[str, ...]] = {
    "tr": ("Pzt", "Sal", "Çar", "Per", "Cum", "Cmt", "Paz"),
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
}

MONTH_LABELS: dict[str, tuple[str, ...]] = {
    "tr": (
        "Oca",
        "Şub",
        "Mar",
        "Nis",
        "May",
        "Haz",
        "Tem",
        "Ağu",
        "Eyl",
        "Eki",
        "Kas",
        "Ara",
    ),
    "en": (
        "Jan",
        "Feb",
        "Mar",
        "Apr",
        "May",
        "Jun",
        "Jul",
        "Aug",
        "Sep",
        "Oct",
        "Nov",
        "Dec",
    ),
}


@dataclass(frozen=True)
class WeekRange:
    start: date
    end: date


def _locale(locale: str | None) -> str:
    return locale if locale in WEEKDAY_LABELS else DEFAULT_LOCALE


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going up (4.5 -> 5, 3.5 -> 4)."""

    return math.floor(value + 0.5)


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_date(value: str) -> date | None:
    """Parse ``YYYY-MM-DD``; anything else yields ``None``."""

    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return None


def _coerce_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"invalid week identifier: {value!r}")
    return parsed


def week_identifier(value: date | datetime) -> date:
    """Return the Monday of the week containing ``value``.

    Sunday closes the week that started on the preceding Monday.
    """

    day = value.date() if isinstance(value, datetime) else value
    return day - timedelta(days=day.weekday())


def current_week_identifier(today: date | None = None) -> date:
    return week_identifier(today or date.today())


def week_range(week_start: str | date) -> WeekRange:
    start = _coerce_date(week_start)
    return WeekRange(start=start, end=start + timedelta(days=6))


def format_week_range(start: str | date, end: str | date, locale: str | None = None) -> str:
    """Render ``"15 Oca – 21 Oca 2024"`` style labels, start first."""

    months = MONTH_LABELS[_locale(locale)]
    start_day = _coerce_date(start)
    end_day = _coerce_date(end)
    start_label = f"{start_day.day} {months[start_day.month - 1]}"
    end_label = f"{end_day.day} {months[end_day.month - 1]} {end_day.year}"
    return f"{start_label} – {end_label}"


def weekday_label(value: date, locale: str | None = None) -> str:
    return WEEKDAY_LABELS[_locale(locale)][value.weekday()]


def weekday_labels(locale: str | None = None) -> list[str]:
    return list(WEEKDAY_LABELS[_locale(locale)])


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_weekday_of_month(year: int, month: int) -> int:
    """Monday-based index (0..6) of the first day of the month."""

    return date(year, month, 1).weekday()


def same_month(value: str, reference: date) -> bool:
    parsed = parse_date(value)
    if parsed is None:
        return False
    return parsed.year == reference.year and parsed.month == reference.month


__all__ = [
    "DEFAULT_LOCALE",
    "MONTH_LABELS",
    "WEEKDAY_LABELS",
    "WeekRange",
    "current_week_identifier",
    "days_in_month",
    "first_weekday_of_month",
    "format_date",
    "format_week_range",
    "parse_date",
    "round_half_up",
    "same_month",
    "week_identifier",
    "week_range",
    "weekday_label",
    "weekday_labels",
]
