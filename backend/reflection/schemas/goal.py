from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from reflection.core.constants import MAX_YEAR, MIN_YEAR


class GoalBase(BaseModel):
    title: str
    description: str = ""
    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)


class GoalCreate(GoalBase):
    """Schema for creating a goal. Order is assigned by the server."""
    pass


class GoalUpdate(BaseModel):
    """Partial update: only the fields sent are changed."""

    title: Optional[str] = None
    description: Optional[str] = None

    # Be lenient with extra fields from clients
    model_config = ConfigDict(extra="ignore")


class GoalRead(GoalBase):
    id: str
    user_id: str
    order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GoalReorder(BaseModel):
    # Every goal id of one (owner, year) scope, in the new display order
    goal_ids: list[str]
