"""Week numbering and year-grid layout.

Pure functions, no I/O. Week start dates use a fixed Monday-anchored rule
(week 1 begins on the Monday on or before Jan 1), which is what the check-in
key scheme and the year timeline are built on.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta

MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def monday_of(d: date) -> date:
    # Monday = 0, Sunday = 6
    return d - timedelta(days=d.weekday())


def week_and_year(d: date | datetime | None = None) -> tuple[int, int]:
    """(year, week) whose Monday-to-Sunday span contains `d`.

    Week 1 is the week holding Jan 1, so this always agrees with
    `week_start_date`. Dec 26-31 days whose week runs into January belong
    to week 1 of the next year.
    Examples: 2023-01-05 -> (2023, 2), 2024-12-30 -> (2025, 1)

    Defaults to today. Datetimes are reduced to their calendar date as-is,
    convert to the wanted zone first (see `today_in`).
    """
    if d is None:
        d = date.today()
    if isinstance(d, datetime):
        d = d.date()
    monday = monday_of(d)
    if monday.month == 12 and monday.day >= 26:
        return monday.year + 1, 1
    return d.year, (monday - monday_of(date(d.year, 1, 1))).days // 7 + 1


def week_of_year(d: date | datetime | None = None) -> int:
    """Week number (weeks start on Monday) containing `d`, see `week_and_year`."""
    return week_and_year(d)[1]


def weeks_in_year(year: int) -> int:
    """52 or 53, per the ISO week count of `year`.

    Anchored on July 1 so dates at the Jan/Dec boundary, which can belong to
    the neighbouring ISO year, never pick the wrong year.
    """
    iso_year = date(year, 7, 1).isocalendar()[0]
    start = date.fromisocalendar(iso_year, 1, 1)
    next_start = date.fromisocalendar(iso_year + 1, 1, 1)
    return (next_start - start).days // 7


def week_start_date(week_number: int, year: int) -> date:
    """Monday that begins `week_number` of `year`.

    Week 1 starts on the Monday on or before Jan 1 (a Sunday Jan 1 rolls back
    six days). Week N is N-1 weeks after that.
    Examples: (1, 2024) -> 2024-01-01, (1, 2025) -> 2024-12-30
    """
    jan1 = date(year, 1, 1)
    first_monday = monday_of(jan1)
    return first_monday + timedelta(weeks=week_number - 1)


def week_end_date(week_number: int, year: int) -> date:
    """Sunday that ends `week_number` of `year`."""
    return week_start_date(week_number, year) + timedelta(days=6)


def _month_day(d: date) -> str:
    return f"{MONTH_ABBR[d.month - 1]} {d.day}"


def format_week_range(week_number: int, year: int) -> str:
    """Example: (2, 2025) -> 'Jan 6 – Jan 12, 2025'"""
    start = week_start_date(week_number, year)
    end = start + timedelta(days=6)
    return f"{_month_day(start)} – {_month_day(end)}, {year}"


def format_week_range_short(week_number: int, year: int) -> str:
    """Example: 'Jan 6–12' within one month, else 'Dec 30 – Jan 5'"""
    start = week_start_date(week_number, year)
    end = start + timedelta(days=6)
    if start.month == end.month:
        return f"{_month_day(start)}–{end.day}"
    return f"{_month_day(start)} – {_month_day(end)}"


def format_week_range_tiny(week_number: int, year: int) -> str:
    """Compact range for small cells: '1/6-12' or '12/30-1/5'"""
    start = week_start_date(week_number, year)
    end = start + timedelta(days=6)
    if start.month == end.month:
        return f"{start.month}/{start.day}-{end.day}"
    return f"{start.month}/{start.day}-{end.month}/{end.day}"


def month_for_week(week_number: int, year: int) -> int:
    """0-based month index (Jan = 0) of the week's start date."""
    return week_start_date(week_number, year).month - 1


def is_first_week_of_month(week_number: int, year: int) -> bool:
    if week_number == 1:
        return True
    return month_for_week(week_number, year) != month_for_week(week_number - 1, year)


def month_label(week_number: int, year: int) -> str:
    return MONTH_ABBR[month_for_week(week_number, year)]


@dataclass(frozen=True)
class MonthSpan:
    month: int  # 0-based month index
    label: str
    start_week: int
    end_week: int
    week_count: int
    start_col: int  # 1-based grid column (after the label spacer)


def month_spans(year: int, total_weeks: int) -> list[MonthSpan]:
    """Group weeks 1..total_weeks into runs that start in the same month.

    Runs are contiguous and cover the whole range, so the week counts add up
    to `total_weeks` and each start_col follows the previous run.
    """
    spans: list[MonthSpan] = []
    col = 1
    current_month = -1
    start_week = 1

    def _close(end_week: int) -> None:
        nonlocal col
        count = end_week - start_week + 1
        spans.append(
            MonthSpan(
                month=current_month,
                label=month_label(start_week, year),
                start_week=start_week,
                end_week=end_week,
                week_count=count,
                start_col=col,
            )
        )
        col += count

    for week in range(1, total_weeks + 1):
        month = month_for_week(week, year)
        if month != current_month:
            if current_month >= 0:
                _close(week - 1)
            current_month = month
            start_week = week
    if current_month >= 0:
        _close(total_weeks)
    return spans


def today_in(tz_name: str | None = None) -> date:
    """Today's date in the given zone.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    """
    from datetime import timezone

    now = datetime.now(timezone.utc)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo

        return now.astimezone(ZoneInfo(tz_name)).date()
    return now.astimezone().date()


def current_week(tz_name: str | None = None) -> int:
    return week_of_year(today_in(tz_name))


def current_week_and_year(tz_name: str | None = None) -> tuple[int, int]:
    return week_and_year(today_in(tz_name))
