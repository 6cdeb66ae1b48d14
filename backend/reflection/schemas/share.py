from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from reflection.schemas.goal import GoalRead


class ShareCreate(BaseModel):
    goal_id: str
    recipient_email: str


class ShareRead(BaseModel):
    id: str
    owner_id: str
    owner_name: str
    shared_with_id: str
    shared_with_email: str
    goal_id: str
    goal_title: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShareResult(BaseModel):
    """Outcome of a share attempt. Sharing reports failures here instead of raising."""

    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    share: Optional[ShareRead] = None


class SharedGoalRead(GoalRead):
    """A goal someone shared with the caller, tagged with who shared it."""

    owner_name: str
    share_id: str
