from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from reflection.db import Base
from reflection.models._ids import new_id, utcnow


class CheckIn(Base):
    __tablename__ = "check_ins"
    # At most one check-in per goal per week
    __table_args__ = (
        UniqueConstraint("goal_id", "week_number", "year", name="uq_check_ins_goal_week"),
    )

    id = Column(String(32), primary_key=True, default=new_id)

    goal_id = Column(String(32), nullable=False, index=True)
    week_number = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)

    reflection = Column(String, nullable=False, default="")
    # 1..5, or NULL when the week was not rated
    progress_rating = Column(Integer, nullable=True)

    # Last save time: overwritten on every upsert
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
