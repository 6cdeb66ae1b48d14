from sqlalchemy import Column, DateTime, String
from reflection.db import Base
from reflection.models._ids import utcnow


class UserProfile(Base):
    __tablename__ = "user_profiles"

    uid = Column(String, primary_key=True)

    # Lowercased; the lookup key when sharing by email
    email = Column(String, nullable=False, unique=True, index=True)
    display_name = Column(String, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
