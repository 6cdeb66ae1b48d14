from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from reflection.schemas.goal import GoalRead


class CheckInUpsert(BaseModel):
    reflection: str = ""
    progress_rating: Optional[int] = None  # 1..5


class CheckInRead(BaseModel):
    id: str
    goal_id: str
    week_number: int
    year: int
    reflection: str
    progress_rating: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WeekCheckIns(BaseModel):
    """Everything the weekly check-in screen shows for one week."""

    year: int
    week_number: int
    weeks_in_year: int
    week_range: str
    completion_percent: int
    # Copy shown on the check-in form
    reflection_prompt: str
    rating_labels: dict[int, str]
    # Goals still missing a check-in come first
    goals: list[GoalRead]
    check_ins: list[CheckInRead]
