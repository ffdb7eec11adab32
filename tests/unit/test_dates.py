from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from daynote.app.stats.dates import (
    current_week_identifier,
    days_in_month,
    first_weekday_of_month,
    format_week_range,
    parse_date,
    round_half_up,
    same_month,
    week_identifier,
    week_range,
    weekday_label,
)


def test_week_identifier_sunday_belongs_to_previous_monday() -> None:
    assert week_identifier(date(2024, 1, 21)) == date(2024, 1, 15)
    assert week_identifier(date(2024, 1, 15)) == date(2024, 1, 15)
    assert week_identifier(date(2024, 1, 18)) == date(2024, 1, 15)
    assert week_identifier(datetime(2024, 1, 17, 23, 59)) == date(2024, 1, 15)


def test_week_identifier_is_monday_within_six_days() -> None:
    day = date(2023, 12, 20)
    for _ in range(120):
        start = week_identifier(day)
        assert start.weekday() == 0
        assert 0 <= (day - start).days <= 6
        day += timedelta(days=1)


def test_current_week_identifier_uses_given_day() -> None:
    assert current_week_identifier(date(2024, 3, 10)) == date(2024, 3, 4)


def test_week_range_spans_seven_days() -> None:
    bounds = week_range("2024-01-15")
    assert bounds.start == date(2024, 1, 15)
    assert bounds.end == date(2024, 1, 21)


def test_week_range_rejects_invalid_identifier() -> None:
    with pytest.raises(ValueError):
        week_range("next monday")


def test_format_week_range_turkish_labels() -> None:
    assert format_week_range(date(2024, 1, 15), date(2024, 1, 21)) == "15 Oca – 21 Oca 2024"
    assert format_week_range("2024-01-29", "2024-02-04", "tr") == "29 Oca – 4 Şub 2024"


def test_format_week_range_english_labels() -> None:
    assert format_week_range(date(2024, 1, 15), date(2024, 1, 21), "en") == "15 Jan – 21 Jan 2024"


def test_weekday_label_is_monday_first() -> None:
    assert weekday_label(date(2024, 3, 4)) == "Pzt"
    assert weekday_label(date(2024, 3, 10)) == "Paz"
    assert weekday_label(date(2024, 3, 10), "en") == "Sun"
    assert weekday_label(date(2024, 3, 10), "de") == "Paz"


def test_month_geometry() -> None:
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert first_weekday_of_month(2024, 1) == 0
    assert first_weekday_of_month(2024, 9) == 6


@pytest.mark.parametrize(
    ("value", "expected"),
    [(4.5, 5), (3.5, 4), (2.4, 2), (18.333, 18), (0.0, 0)],
)
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


def test_parse_date_rejects_garbage() -> None:
    assert parse_date("2024-03-10") == date(2024, 3, 10)
    assert parse_date("2024-13-01") is None
    assert parse_date("yesterday") is None


def test_same_month() -> None:
    reference = date(2024, 3, 10)
    assert same_month("2024-03-01", reference)
    assert not same_month("2024-02-29", reference)
    assert not same_month("2023-03-10", reference)
    assert not same_month("broken", reference)
