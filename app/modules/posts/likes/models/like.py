from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey

from app.db.session import Base

# The composite primary key is what keeps a post's likes a set
class PostLike(Base):
    __tablename__ = "post_likes"

    post_id = Column(String, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
