from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.modules.community.schemas.community import CommunityStats
from app.modules.posts.likes.models.like import PostLike
from app.modules.posts.models.post import Post
from app.modules.posts.services.post import visible
from app.modules.user_management.models.user import User

FEED_SIZE = 50

def get_community_feed(db: Session, limit: int = FEED_SIZE) -> List[Post]:
    """The newest visible posts from everyone"""
    return visible(db.query(Post)).order_by(Post.created_at.desc()).limit(limit).all()

def get_community_stats(db: Session) -> CommunityStats:
    """Totals over users, visible posts and the likes on them"""
    total_users = db.query(func.count(User.id)).scalar() or 0
    total_posts = visible(db.query(func.count(Post.id))).scalar() or 0
    total_likes = (
        visible(
            db.query(func.count(PostLike.user_id))
            .select_from(PostLike)
            .join(Post, Post.id == PostLike.post_id)
        )
        .scalar()
        or 0
    )
    return CommunityStats(total_users=total_users, total_posts=total_posts, total_likes=total_likes)
