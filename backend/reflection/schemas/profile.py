from datetime import datetime
from pydantic import BaseModel, ConfigDict


class UserProfileCreate(BaseModel):
    uid: str
    email: str
    display_name: str = ""


class UserProfileRead(UserProfileCreate):
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
