from typing import Any
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.posts.schemas.post import PostList
from app.modules.posts.services.post import serialize_posts
from app.modules.posts.services.ranking import PostFilter, build_query
from app.modules.posts.models.post import Post
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserResponse, UserUpdate
from app.modules.user_management.services.user import build_profile, get_user_or_404, update_user

router = APIRouter()
logger = logging.getLogger("app")

@router.get("/me", response_model=UserResponse)
def read_user_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get current user"""
    return UserResponse(user=build_profile(db, current_user))

@router.put("/profile", response_model=UserResponse)
def update_user_me(
    *,
    db: Session = Depends(get_db),
    user_in: UserUpdate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Update current user.
    Posts already written keep the author name they were created with.
    """
    user = update_user(db, current_user.id, user_in)
    return UserResponse(user=build_profile(db, user))

@router.get("/{user_id}", response_model=UserResponse)
def read_user_by_id(
    user_id: str,
    db: Session = Depends(get_db),
) -> Any:
    """Get a specific user by id"""
    user = get_user_or_404(db, user_id)
    return UserResponse(user=build_profile(db, user))

@router.get("/{user_id}/posts", response_model=PostList)
def read_user_posts(
    user_id: str,
    db: Session = Depends(get_db),
) -> Any:
    """Get all visible posts of a user, newest first"""
    get_user_or_404(db, user_id)
    posts = (
        build_query(db, PostFilter(author_id=user_id))
        .order_by(Post.created_at.desc())
        .all()
    )
    return PostList(posts=serialize_posts(db, posts))
