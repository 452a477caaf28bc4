from typing import Any, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.modules.community.schemas.community import CommunityStats, FeedResponse, UserSearchResponse
from app.modules.community.services.community import get_community_feed, get_community_stats
from app.modules.posts.services.post import serialize_posts
from app.modules.user_management.services.user import search_users

router = APIRouter()

@router.get("/feed", response_model=FeedResponse)
def read_community_feed(db: Session = Depends(get_db)) -> Any:
    """Get the newest posts from the whole community"""
    return FeedResponse(posts=serialize_posts(db, get_community_feed(db)))

@router.get("/search", response_model=UserSearchResponse)
def search_community(q: Optional[str] = None, db: Session = Depends(get_db)) -> Any:
    """Find users by name or email"""
    if not q or not q.strip():
        return UserSearchResponse(users=[])
    return UserSearchResponse(users=search_users(db, q))

@router.get("/stats", response_model=CommunityStats)
def read_community_stats(db: Session = Depends(get_db)) -> Any:
    return get_community_stats(db)
