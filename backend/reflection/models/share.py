from sqlalchemy import Column, DateTime, String, UniqueConstraint
from reflection.db import Base
from reflection.models._ids import new_id, utcnow


class Share(Base):
    __tablename__ = "shares"
    __table_args__ = (
        UniqueConstraint("owner_id", "shared_with_id", "goal_id", name="uq_shares_owner_recipient_goal"),
    )

    id = Column(String(32), primary_key=True, default=new_id)

    owner_id = Column(String, nullable=False, index=True)
    shared_with_id = Column(String, nullable=False, index=True)
    goal_id = Column(String(32), nullable=False, index=True)

    # Snapshots taken when the share is created; not refreshed afterwards
    owner_name = Column(String, nullable=False)
    shared_with_email = Column(String, nullable=False)
    goal_title = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
