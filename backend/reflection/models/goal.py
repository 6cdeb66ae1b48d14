from sqlalchemy import Column, DateTime, Integer, String, Index
from reflection.db import Base
from reflection.models._ids import new_id, utcnow


class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (Index("ix_goals_user_year", "user_id", "year"),)

    id = Column(String(32), primary_key=True, default=new_id)

    # Owning user (id issued by the identity provider)
    user_id = Column(String, nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")

    year = Column(Integer, nullable=False)

    # Display position within the owner's goals for the year.
    # Not unique at the table level; reorder normalizes it to 0..n-1.
    order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
