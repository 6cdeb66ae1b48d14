from fastapi import APIRouter, Depends, Path

from reflection.api.deps import Repositories, get_current_user_id, get_repos, get_settings
from reflection.core.config import Settings
from reflection.core.constants import MAX_YEAR, MIN_YEAR
from reflection.core.progress import year_overview
from reflection.core.week_utils import (
    current_week_and_year,
    format_week_range,
    format_week_range_short,
    format_week_range_tiny,
    is_first_week_of_month,
    month_spans,
    week_end_date,
    week_start_date,
    weeks_in_year,
)
from reflection.schemas.calendar import CalendarRead, MonthSpanRead, WeekInfo, YearOverview


router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/{year}", response_model=CalendarRead)
def get_calendar(year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR), settings: Settings = Depends(get_settings)):
    total = weeks_in_year(year)
    this_year, this_week = current_week_and_year(settings.timezone)
    weeks = [
        WeekInfo(
            week_number=w,
            start=week_start_date(w, year),
            end=week_end_date(w, year),
            range=format_week_range(w, year),
            range_short=format_week_range_short(w, year),
            range_tiny=format_week_range_tiny(w, year),
            is_first_of_month=is_first_week_of_month(w, year),
        )
        for w in range(1, total + 1)
    ]
    return CalendarRead(
        year=year,
        weeks_in_year=total,
        current_year=this_year,
        current_week=this_week,
        month_spans=[MonthSpanRead.model_validate(s) for s in month_spans(year, total)],
        weeks=weeks,
    )


@router.get("/{year}/overview", response_model=YearOverview)
def get_year_overview(
    year: int = Path(..., ge=MIN_YEAR, le=MAX_YEAR),
    user_id: str = Depends(get_current_user_id),
    repos: Repositories = Depends(get_repos),
):
    goals = repos.goals.get_goals_for_year(user_id, year)
    all_check_ins = repos.check_ins.get_all_check_ins_for_user(user_id)
    return YearOverview.model_validate(year_overview(goals, all_check_ins, year), from_attributes=True)
