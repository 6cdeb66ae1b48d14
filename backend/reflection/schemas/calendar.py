from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict

from reflection.schemas.goal import GoalRead


class MonthSpanRead(BaseModel):
    month: int
    label: str
    start_week: int
    end_week: int
    week_count: int
    start_col: int

    model_config = ConfigDict(from_attributes=True)


class WeekInfo(BaseModel):
    week_number: int
    start: date
    end: date
    range: str
    range_short: str
    range_tiny: str
    is_first_of_month: bool


class CalendarRead(BaseModel):
    year: int
    weeks_in_year: int
    # Today's week; late December can already be week 1 of the next year
    current_year: int
    current_week: int
    month_spans: list[MonthSpanRead]
    weeks: list[WeekInfo]


class WeekCell(BaseModel):
    week_number: int
    checked_in: bool
    has_reflection: bool
    progress_rating: Optional[int] = None


class GoalTimeline(BaseModel):
    goal: GoalRead
    average_rating: Optional[float] = None
    weeks: list[WeekCell]


class YearOverview(BaseModel):
    year: int
    weeks_in_year: int
    month_spans: list[MonthSpanRead]
    goals: list[GoalTimeline]
