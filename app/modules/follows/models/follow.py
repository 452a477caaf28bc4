from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint

from app.db.session import Base

# One row per directed edge; the composite key makes the edge set unique
class Follow(Base):
    __tablename__ = "follows"

    follower_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    followee_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint("follower_id != followee_id", name="no_self_follow"),
    )
