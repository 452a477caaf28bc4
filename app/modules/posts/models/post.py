from datetime import datetime

from sqlalchemy import Boolean, Column, String, DateTime, Text, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.db.session import Base

class Post(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    image = Column(String, nullable=True)
    category = Column(String(32), nullable=False, default="recipe")
    type = Column(String(16), nullable=False, default="recipe")
    cuisine = Column(String(50), nullable=True)
    # Display name at creation time; never refreshed from the users table
    author = Column(String, nullable=False)
    # Weak reference: the user row may be gone
    author_id = Column(String, nullable=False)
    is_published = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    tags = relationship(
        "PostTag",
        order_by="PostTag.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    likes = relationship(
        "PostLike",
        order_by="PostLike.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    comments = relationship(
        "Comment",
        order_by="Comment.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_posts_author_id_created_at", "author_id", "created_at"),
        Index("ix_posts_category_created_at", "category", "created_at"),
        Index("ix_posts_visibility_created_at", "is_published", "is_deleted", "created_at"),
    )

class PostTag(Base):
    __tablename__ = "post_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(String, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    name = Column(String(50), nullable=False, index=True)
