from datetime import date, datetime, timedelta

from reflection.core.week_utils import (
    current_week,
    current_week_and_year,
    format_week_range,
    format_week_range_short,
    format_week_range_tiny,
    is_first_week_of_month,
    month_label,
    month_spans,
    today_in,
    week_and_year,
    week_end_date,
    week_of_year,
    week_start_date,
    weeks_in_year,
)


def test_week_of_year_counts_from_week_holding_jan_1():
    assert week_of_year(date(2024, 3, 6)) == 10
    assert week_of_year(date(2024, 1, 1)) == 1
    # Jan 1 2021 is a Friday, it opens week 1 of 2021
    assert week_of_year(date(2021, 1, 1)) == 1
    assert week_of_year(date(2023, 1, 5)) == 2
    assert week_of_year(datetime(2024, 12, 30, 23, 59)) == 1


def test_week_and_year_rolls_late_december_into_next_year():
    assert week_and_year(date(2024, 12, 29)) == (2024, 52)
    assert week_and_year(date(2024, 12, 30)) == (2025, 1)
    assert week_and_year(date(2022, 12, 31)) == (2023, 1)
    # Jan 1 2024 is a Monday, so Dec 25-31 2023 stays in 2023
    assert week_and_year(date(2023, 12, 31)) == (2023, 53)


def test_week_and_year_agrees_with_week_start_date():
    d = date(2021, 1, 1)
    while d <= date(2023, 12, 31):
        year, week = week_and_year(d)
        assert week_start_date(week, year) <= d <= week_end_date(week, year)
        d += timedelta(days=1)


def test_current_week_uses_same_numbering():
    year, week = current_week_and_year("UTC")
    assert week == current_week("UTC")
    assert week_start_date(week, year) <= today_in("UTC") <= week_end_date(week, year)


def test_weeks_in_year_known_values():
    assert weeks_in_year(2015) == 53
    assert weeks_in_year(2020) == 53
    assert weeks_in_year(2026) == 53
    assert weeks_in_year(2021) == 52
    assert weeks_in_year(2024) == 52
    assert weeks_in_year(2025) == 52


def test_weeks_in_year_is_52_or_53():
    for year in range(1990, 2060):
        assert weeks_in_year(year) in (52, 53)


def test_week_start_date_offset_rule():
    # Jan 1 2024 is a Monday
    assert week_start_date(1, 2024) == date(2024, 1, 1)
    # Jan 1 2025 is a Wednesday: roll back to Monday Dec 30
    assert week_start_date(1, 2025) == date(2024, 12, 30)
    # Jan 1 2023 is a Sunday: roll back six days
    assert week_start_date(1, 2023) == date(2022, 12, 26)
    assert week_start_date(10, 2024) == date(2024, 3, 4)
    assert week_end_date(10, 2024) == date(2024, 3, 10)


def test_week_start_date_is_always_monday():
    for year in range(2000, 2040):
        for week in range(1, weeks_in_year(year) + 1):
            assert week_start_date(week, year).weekday() == 0


def test_format_week_range_variants():
    assert format_week_range(2, 2025) == "Jan 6 – Jan 12, 2025"
    assert format_week_range_short(2, 2025) == "Jan 6–12"
    assert format_week_range_tiny(2, 2025) == "1/6-12"

    assert format_week_range(1, 2025) == "Dec 30 – Jan 5, 2025"
    assert format_week_range_short(1, 2025) == "Dec 30 – Jan 5"
    assert format_week_range_tiny(1, 2025) == "12/30-1/5"


def test_first_week_of_month_and_label():
    assert is_first_week_of_month(1, 2024)
    assert not is_first_week_of_month(2, 2024)
    # Week 6 of 2024 starts Feb 5
    assert is_first_week_of_month(6, 2024)
    assert month_label(6, 2024) == "Feb"


def test_month_spans_2024():
    spans = month_spans(2024, 52)
    assert spans[0].month == 0
    assert spans[0].label == "Jan"
    assert (spans[0].start_week, spans[0].end_week, spans[0].week_count, spans[0].start_col) == (1, 5, 5, 1)
    assert (spans[1].label, spans[1].start_week, spans[1].end_week, spans[1].start_col) == ("Feb", 6, 9, 6)
    assert (spans[-1].label, spans[-1].start_week, spans[-1].end_week) == ("Dec", 49, 52)


def test_month_spans_week_one_in_previous_december():
    spans = month_spans(2025, 52)
    assert (spans[0].month, spans[0].label, spans[0].week_count) == (11, "Dec", 1)
    assert (spans[1].label, spans[1].start_week, spans[1].start_col) == ("Jan", 2, 2)


def test_month_spans_cover_all_weeks():
    for year in range(2000, 2040):
        total = weeks_in_year(year)
        spans = month_spans(year, total)
        assert sum(s.week_count for s in spans) == total
        assert spans[0].start_week == 1
        assert spans[-1].end_week == total
        col = 1
        for prev, cur in zip(spans, spans[1:]):
            assert cur.start_week == prev.end_week + 1
        for s in spans:
            assert s.start_col == col
            assert s.week_count == s.end_week - s.start_week + 1
            col += s.week_count


def test_month_spans_empty():
    assert month_spans(2024, 0) == []
