"""
Read paths over posts: paginated listing, literal substring search and the
trending ranking.

Every query here goes through ``visible()`` so unpublished and soft-deleted
posts never surface. Listings are ordered newest first; pagination relies on
that order being stable.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
import logging
import math

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.db.filters import contains
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.likes.models.like import PostLike
from app.modules.posts.models.post import Post, PostTag
from app.modules.posts.schemas.post import Pagination, TrendingPost
from app.modules.posts.services.post import collect_author_ids, serialize_post, visible
from app.modules.user_management.services.user import get_author_summaries

logger = logging.getLogger(__name__)

TRENDING_WINDOWS = {
    "day": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}
DEFAULT_TIMEFRAME = "week"
COMMENT_WEIGHT = 2

@dataclass
class PostFilter:
    category: Optional[str] = None
    author: Optional[str] = None
    author_id: Optional[str] = None
    search: Optional[str] = None

def matches_text(term: str):
    """Title, content or any tag contains ``term`` (case-insensitive, literal)"""
    return or_(
        contains(Post.title, term),
        contains(Post.content, term),
        Post.tags.any(contains(PostTag.name, term)),
    )

def build_query(db: Session, post_filter: PostFilter):
    query = visible(db.query(Post))
    if post_filter.category:
        query = query.filter(Post.category == post_filter.category)
    if post_filter.author:
        query = query.filter(contains(Post.author, post_filter.author))
    if post_filter.author_id:
        query = query.filter(Post.author_id == post_filter.author_id)
    if post_filter.search:
        query = query.filter(matches_text(post_filter.search))
    return query

def _page(query, page: int, limit: int) -> List[Post]:
    skip = (page - 1) * limit
    return (
        query.order_by(Post.created_at.desc(), Post.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )

def list_posts(db: Session, post_filter: PostFilter, page: int = 1, limit: int = 10) -> Tuple[List[Post], Pagination]:
    """Get a page of visible posts with pagination info"""
    logger.info(f"Listing posts page={page}, limit={limit}, filter={post_filter}")
    query = build_query(db, post_filter)
    total = query.count()
    posts = _page(query, page, limit)
    skip = (page - 1) * limit

    pagination = Pagination(
        current=page,
        total=math.ceil(total / limit),
        has_more=skip + len(posts) < total,
        total_posts=total,
    )
    return posts, pagination

def search_posts(db: Session, q: str, post_filter: PostFilter, page: int = 1, limit: int = 10) -> List[Post]:
    """Get visible posts whose title, content or tags contain ``q``"""
    logger.info(f"Searching posts for {q!r} page={page}, limit={limit}")
    post_filter.search = q
    return _page(build_query(db, post_filter), page, limit)

def trending_window_start(timeframe: str, now: Optional[datetime] = None) -> datetime:
    window = TRENDING_WINDOWS.get(timeframe, TRENDING_WINDOWS[DEFAULT_TIMEFRAME])
    return (now or datetime.utcnow()) - window

def get_trending_posts(db: Session, limit: int = 10, timeframe: str = DEFAULT_TIMEFRAME) -> List[TrendingPost]:
    """
    Rank posts created inside the look-back window by likes + 2 x comments.

    Posts older than the window are not eligible at all, whatever their
    engagement.
    """
    start = trending_window_start(timeframe)
    like_count = (
        select(func.count(PostLike.user_id))
        .where(PostLike.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )
    comment_count = (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )
    score = (like_count + COMMENT_WEIGHT * comment_count).label("score")

    rows = (
        visible(db.query(Post, score))
        .filter(Post.created_at >= start)
        .order_by(score.desc(), Post.created_at.desc())
        .limit(limit)
        .all()
    )
    authors = get_author_summaries(db, collect_author_ids(post for post, _ in rows))
    return [serialize_post(post, authors, schema=TrendingPost, score=score) for post, score in rows]
